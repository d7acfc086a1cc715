"""vcodegen — render-function code generator for compiled templates.

This package is the final stage of a template compiler: it takes a fully
transformed IR tree (template nodes whose codegen form has been resolved,
plus JavaScript-AST nodes) and prints the JavaScript source of a render
function, in either ``new Function()`` form or as an ES module.

Submodules
----------
ast
    IR node dataclasses, ``NodeTypes`` and the ``create_*`` factories.

runtime_helpers
    ``RuntimeHelper`` symbols, ``HELPER_NAME_MAP`` and
    ``register_runtime_helpers`` for downstream compilers.

codegen
    ``generate()`` driver, ``CodegenOptions`` and ``CodegenResult``.

context / printer / preamble
    Output buffer and indentation, the per-node printer, and the helper
    imports / hoists / asset resolution printed around the body.

loader
    JSON IR documents → node trees.

errors
    Structured error codes (``VCG-XXXX``) and the exception hierarchy.

main
    CLI entry-point with subcommands: ``generate``, ``helpers``.

Usage
-----
Command-line::

    python -m vcodegen generate app.ir.json --mode module
    python -m vcodegen --help

Programmatic::

    from vcodegen import generate
    from vcodegen.ast import create_root, create_interpolation

    root = create_root(codegen_node=create_interpolation("msg"))
    print(generate(root, mode="module", prefix_identifiers=True).code)

"""

from __future__ import annotations

__version__: str = "0.1.0"

from vcodegen.codegen import CodegenOptions, CodegenResult, generate  # noqa: E402

__all__: list[str] = [
    "__version__",
    "generate",
    "CodegenOptions",
    "CodegenResult",
]
