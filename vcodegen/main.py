#!/usr/bin/env python3
"""vcodegen/main.py — CLI entry-point for the render-function generator.

Usage examples
--------------
    # Print the render function for a serialized IR tree
    python -m vcodegen generate app.ir.json

    # ES module output with prefixed identifiers, written to a file
    python -m vcodegen generate app.ir.json --mode module \\
        --prefix-identifiers -o app.render.js

    # Scoped-style module output
    python -m vcodegen generate app.ir.json --mode module --scope-id data-v-1

    # Code, preamble and helper list as one JSON object
    python -m vcodegen generate app.ir.json --format json

    # List registered runtime helpers
    python -m vcodegen helpers

Exit codes
----------
    0   Success.
    1   The IR document is malformed (unknown node type / helper, bad shape).
    2   Infrastructure failure (missing file, invalid JSON, bad options).

The module doubles as ``python -m vcodegen`` via the companion
``vcodegen/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import textwrap
from pathlib import Path
from typing import Optional, Sequence, TextIO

from vcodegen import __version__
from vcodegen.codegen import MODES, CodegenOptions, generate
from vcodegen.errors import (
    CodegenError,
    InvalidOptionsError,
    IRLoadError,
    MalformedIRError,
)
from vcodegen.loader import load_root_file
from vcodegen.runtime_helpers import HELPER_NAME_MAP

_log = logging.getLogger("vcodegen")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``vcodegen`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("vcodegen")
    root.setLevel(level)
    root.addHandler(handler)


def _resolve_path(raw: str, label: str = "file") -> Path:
    """Absolute path of an existing input file; exits with EXIT_INFRA otherwise."""
    p = Path(raw).expanduser().resolve()
    if not p.is_file():
        _log.error("%s not found: %s", label, p)
        raise SystemExit(EXIT_INFRA)
    return p


def _open_output(dest: Optional[str]) -> TextIO:
    """stdout for ``None`` / ``"-"``, else a new UTF-8 file (parents created)."""
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


# ===========================================================================
# Subcommand implementations
# ===========================================================================

# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

def cmd_generate(args: argparse.Namespace) -> int:
    """Load an IR document and print its render function."""
    ir_path = _resolve_path(args.ir_file, "IR document")

    try:
        options = CodegenOptions(
            mode=args.mode,
            prefix_identifiers=args.prefix_identifiers,
            optimize_bindings=args.optimize_bindings,
            ssr=args.ssr,
            scope_id=args.scope_id,
        )
    except InvalidOptionsError as exc:
        sys.stderr.write(exc.to_gcc_format() + "\n")
        return EXIT_INFRA

    _log.info("Generating %s-mode render function for %s", options.mode, ir_path)

    try:
        root = load_root_file(ir_path)
    except IRLoadError as exc:
        sys.stderr.write(exc.to_gcc_format() + "\n")
        if isinstance(exc.cause, json.JSONDecodeError):
            return EXIT_INFRA
        return EXIT_ERROR
    except OSError as exc:
        _log.error("Cannot read %s: %s", ir_path, exc)
        return EXIT_INFRA

    try:
        result = generate(root, options)
    except MalformedIRError as exc:
        sys.stderr.write(exc.to_gcc_format() + "\n")
        return EXIT_ERROR
    except CodegenError as exc:
        sys.stderr.write(exc.to_gcc_format() + "\n")
        return EXIT_INFRA

    out = _open_output(args.output)
    try:
        if args.format == "json":
            payload = {
                "code": result.code,
                "preamble": result.preamble,
                "helpers": result.helpers,
            }
            out.write(json.dumps(payload, indent=2) + "\n")
        else:
            out.write(result.code + "\n")
    finally:
        if out is not sys.stdout:
            out.close()

    if args.output and args.output != "-":
        _log.info("Wrote render function to %s", args.output)
    return EXIT_OK


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

def cmd_helpers(args: argparse.Namespace) -> int:
    """List the registered runtime helpers."""
    for helper, name in HELPER_NAME_MAP.items():
        if args.verbose_list:
            print(f"  {name:<28s} {helper.description}")
        else:
            print(name)
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Top-level parser with the ``generate`` and ``helpers`` subcommands."""

    # --- Top-level parser --------------------------------------------------
    parser = argparse.ArgumentParser(
        prog="vcodegen",
        description=(
            "vcodegen — render-function code generator.\n\n"
            "Turns a finished template IR tree (JSON) into the JavaScript\n"
            "source of a render function."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              vcodegen generate app.ir.json
              vcodegen generate app.ir.json --mode module --prefix-identifiers
              vcodegen generate app.ir.json --format json -o app.json
              vcodegen helpers
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # --- generate ----------------------------------------------------------
    p_generate = subparsers.add_parser(
        "generate",
        aliases=["gen"],
        help="Generate a render function from an IR document.",
        description=(
            "Load a JSON IR document whose root is a ROOT node and print "
            "the generated render function."
        ),
    )
    p_generate.add_argument(
        "ir_file",
        metavar="IR_FILE",
        help="Path to the JSON IR document.",
    )
    g = p_generate.add_argument_group("generation options")
    g.add_argument(
        "--mode",
        choices=MODES,
        default="function",
        help="Output shape (default: function).",
    )
    g.add_argument(
        "--prefix-identifiers",
        action="store_true",
        help="Identifiers are already prefixed; skip the with (this) block.",
    )
    g.add_argument(
        "--optimize-bindings",
        action="store_true",
        help="Bind imported helpers to local consts (module mode only).",
    )
    g.add_argument(
        "--ssr",
        action="store_true",
        help="Emit an ssrRender(_ctx, _push, _parent) function.",
    )
    g.add_argument(
        "--scope-id",
        default=None,
        metavar="ID",
        help="Wrap the render function with withScopeId (module mode only).",
    )
    p_generate.add_argument(
        "-o", "--output",
        default=None,
        metavar="FILE",
        help='Output file ("-" or omit for stdout).',
    )
    p_generate.add_argument(
        "-f", "--format",
        choices=["code", "json"],
        default="code",
        help="Output format (default: code).",
    )
    p_generate.set_defaults(func=cmd_generate)

    # --- helpers -----------------------------------------------------------
    p_helpers = subparsers.add_parser(
        "helpers",
        help="List registered runtime helpers.",
    )
    p_helpers.add_argument(
        "-l", "--long",
        dest="verbose_list",
        action="store_true",
        help="Show each helper's description.",
    )
    p_helpers.set_defaults(func=cmd_helpers)

    return parser


# ===========================================================================
# Main
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the vcodegen CLI.

    Parameters
    ----------
    argv:
        Command-line arguments.  ``None`` → ``sys.argv[1:]``.

    Returns
    -------
    int
        Exit code (see module docstring for semantics).
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    # No subcommand given → print help.
    if not hasattr(args, "func"):
        parser.print_help(sys.stderr)
        return EXIT_INFRA

    try:
        return args.func(args)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_INFRA


if __name__ == "__main__":
    raise SystemExit(main())
