#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
vcodegen/codegen.py
===================

Render-function code generator: finished IR tree → JavaScript source.

This is the last stage of the template compiler.  Parsing and the transform
passes have already run; the ``RootNode`` handed in carries the resolved
codegen tree plus everything the preamble needs (helpers, assets, hoists,
cache / temp counts).  The generator only prints what it is told.

Architecture
------------
Generation is a single pass over one mutable :class:`CodegenContext`:

1. **Options** — resolved and validated into :class:`CodegenOptions`
2. **Preamble** — helper imports / bindings, module imports, hoists
3. **Signature** — ``render()`` or ``ssrRender(_ctx, _push, _parent)``,
   prefixed by ``return `` (function mode) or ``export `` (module mode)
4. **Prologue** — ``with (this) {`` or ``const _ctx = this`` /
   ``const _cache = _ctx.$cache``, asset resolution, temporaries
5. **Body** — the root codegen node through :class:`NodePrinter`

Output modes
------------
- ``function``: a function body meant for ``new Function(code)()``; helpers
  come from the global ``Vue`` object.  Without ``prefix_identifiers`` the
  body runs inside ``with (this)`` so bare identifiers resolve against the
  component instance.
- ``module``: an ES module exporting ``render``; helpers are imported.

Identical (tree, options) input always produces byte-identical output.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from vcodegen import ast as A
from vcodegen.context import CodegenContext
from vcodegen.errors import (
    CodegenErrorCodes,
    InvalidOptionsError,
    MalformedIRError,
    SourceSpan,
    UnknownNodeTypeError,
)
from vcodegen.preamble import (
    PURE_ANNOTATION,
    gen_assets,
    gen_function_preamble,
    gen_helper_destructure,
    gen_module_preamble,
    gen_temps,
    preamble_helpers,
)
from vcodegen.printer import NodePrinter
from vcodegen.runtime_helpers import HELPER_NAME_MAP

__all__ = [
    "generate",
    "CodegenOptions",
    "CodegenResult",
    "resolve_options",
    "MODES",
]

_log = logging.getLogger(__name__)

MODES = ("function", "module")

# camelCase spellings accepted for option names
_OPTION_ALIASES: Dict[str, str] = {
    "prefixIdentifiers": "prefix_identifiers",
    "optimizeBindings": "optimize_bindings",
    "scopeId": "scope_id",
    "runtimeGlobalName": "runtime_global_name",
    "runtimeModuleName": "runtime_module_name",
}


# ═══════════════════════════════════════════════════════════════════════════
# OPTIONS & RESULT
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CodegenOptions:
    """Independently toggleable generation options.

    ``optimize_bindings`` only has an effect in module mode; elsewhere it is
    ignored.  ``scope_id`` wraps the render function with ``withScopeId``
    in (non-SSR) module mode.
    """

    mode: str = "function"
    prefix_identifiers: bool = False
    optimize_bindings: bool = False
    ssr: bool = False
    scope_id: Optional[str] = None
    runtime_global_name: str = "Vue"
    runtime_module_name: str = "vue"

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise InvalidOptionsError(
                f"unknown codegen mode {self.mode!r}",
                hint=f"expected one of: {', '.join(MODES)}",
            )


@dataclass
class CodegenResult:
    """Generated code plus metadata about the generated unit."""

    code: str
    preamble: str
    helpers: List[str] = field(default_factory=list)
    ast: Optional[A.RootNode] = None


def resolve_options(
    options: Union[None, CodegenOptions, Mapping[str, Any]] = None,
    **overrides: Any,
) -> CodegenOptions:
    """Merge *options* and keyword *overrides* into a ``CodegenOptions``."""
    if options is None:
        base = CodegenOptions()
        values: Dict[str, Any] = {}
    elif isinstance(options, CodegenOptions):
        base = options
        values = {}
    else:
        base = CodegenOptions()
        values = dict(options)
    values.update(overrides)

    known = {f.name for f in dataclasses.fields(CodegenOptions)}
    normalized: Dict[str, Any] = {}
    for key, value in values.items():
        name = _OPTION_ALIASES.get(key, key)
        if name not in known:
            raise InvalidOptionsError(
                f"unknown codegen option {key!r}",
                code=CodegenErrorCodes.UNKNOWN_OPTION,
            )
        normalized[name] = value
    return dataclasses.replace(base, **normalized) if normalized else base


# ═══════════════════════════════════════════════════════════════════════════
# DRIVER
# ═══════════════════════════════════════════════════════════════════════════

def _check_root(ast: A.RootNode) -> None:
    """Reject root fields the preamble cannot print."""
    if not isinstance(ast, A.RootNode):
        raise UnknownNodeTypeError(ast)
    for name in ("cached", "temps"):
        value = getattr(ast, name)
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise MalformedIRError(
                f"root {name} must be a non-negative int, got {value!r}",
                span=SourceSpan.from_node(ast),
            )
    for name in ("components", "directives"):
        value = getattr(ast, name)
        if not isinstance(value, (list, tuple)) or not all(
            isinstance(item, str) for item in value
        ):
            raise MalformedIRError(
                f"root {name} must be a list of names, got {value!r}",
                span=SourceSpan.from_node(ast),
            )

def generate(
    ast: A.RootNode,
    options: Union[None, CodegenOptions, Mapping[str, Any]] = None,
    **overrides: Any,
) -> CodegenResult:
    """Generate render function code for *ast*.

    Raises :class:`~vcodegen.errors.MalformedIRError` when the tree holds a
    node or helper the generator cannot print, and
    :class:`~vcodegen.errors.InvalidOptionsError` for bad options.  No
    partial result is returned on failure.
    """
    opts = resolve_options(options, **overrides)
    _check_root(ast)
    context = CodegenContext(ast, opts)
    printer = NodePrinter(context)
    push = context.push

    mode = opts.mode
    ssr = opts.ssr
    has_helpers = bool(ast.helpers)
    use_with_block = not opts.prefix_identifiers and mode != "module" and not ssr
    gen_scope_id = opts.scope_id is not None and mode == "module" and not ssr

    _log.debug(
        "generating %s-mode %s (prefix_identifiers=%s, %d helper(s), "
        "%d hoist(s))",
        mode,
        "ssrRender" if ssr else "render",
        opts.prefix_identifiers,
        len(ast.helpers),
        len(ast.hoists),
    )

    # preambles
    if mode == "function":
        gen_function_preamble(ast, context, printer, use_with_block)
    else:
        gen_module_preamble(ast, context, printer, gen_scope_id)
    preamble = context.code

    # enter render function
    push("return " if mode == "function" else "export ")
    if gen_scope_id:
        push(f"const render = {PURE_ANNOTATION}_withId(")
    if ssr:
        push("function ssrRender(_ctx, _push, _parent) {")
    else:
        push("function render() {")
    context.indent()

    if use_with_block:
        push("with (this) {")
        context.indent()
        # function mode const declarations should be inside with block
        # also they should be renamed to avoid collision with user properties
        if has_helpers:
            push(gen_helper_destructure(context, ast.helpers, "_Vue"))
            push("\n")
            context.newline()
    elif not ssr:
        push("const _ctx = this")
        if ast.cached > 0:
            context.newline()
            push("const _cache = _ctx.$cache")
        context.newline()

    # generate asset resolution statements
    if ast.components:
        gen_assets(ast.components, "component", context)
    if ast.directives:
        if ast.components:
            context.newline()
        gen_assets(ast.directives, "directive", context)
    if ast.components or ast.directives:
        context.newline()

    if ast.temps > 0:
        gen_temps(ast.temps, context)
        context.newline()

    # generate the VNode tree expression
    body = ast.codegen_node
    if isinstance(body, A.BlockStatement):
        printer.gen_statements(body)
    elif not ssr:
        push("return ")
        if body is not None:
            printer.gen_node(body)
        else:
            push("null")
    elif body is not None:
        printer.gen_node(body)

    if use_with_block:
        context.deindent()
        push("}")

    context.deindent()
    push("}")
    if gen_scope_id:
        push(")")

    # preamble bindings first, in declaration order, then body-only helpers
    ordered = preamble_helpers(ast, gen_scope_id)
    ordered += [h for h in context.used_helpers if h not in ordered]
    helpers = [HELPER_NAME_MAP[h] for h in ordered]
    _log.debug("generated %d characters using %d helper(s)", len(context.code), len(helpers))
    return CodegenResult(
        code=context.code,
        preamble=preamble,
        helpers=helpers,
        ast=ast,
    )
