#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
vcodegen/preamble.py
====================

Everything printed before (and at the top of) the render function:

1. **Helper bindings** — ``import { x as _x } from "vue"`` in module mode,
   ``const _Vue = Vue`` / ``const { x: _x } = Vue`` in function mode
2. **Module imports** collected by the transform stage
3. **Scope id wrapper** — ``const _withId = _withScopeId("...")``
4. **Hoists** — ``const _hoisted_<n> = ...``
5. **Asset resolution** and **temporaries**, printed inside the function body

All output is driven by the ``RootNode`` fields and the context options;
``RootNode.helpers`` is taken as the complete helper list.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from vcodegen import ast as A
from vcodegen.context import CodegenContext
from vcodegen.printer import NodePrinter, js_string
from vcodegen.runtime_helpers import (
    CREATE_COMMENT,
    CREATE_STATIC,
    CREATE_TEXT,
    CREATE_VNODE,
    POP_SCOPE_ID,
    PUSH_SCOPE_ID,
    RESOLVE_COMPONENT,
    RESOLVE_DIRECTIVE,
    WITH_SCOPE_ID,
    RuntimeHelper,
)

__all__ = [
    "PURE_ANNOTATION",
    "preamble_helpers",
    "gen_function_preamble",
    "gen_module_preamble",
    "gen_helper_destructure",
    "gen_imports",
    "gen_hoists",
    "gen_assets",
    "gen_temps",
    "to_valid_asset_id",
]

_log = logging.getLogger(__name__)

PURE_ANNOTATION = "/*#__PURE__*/"

# Helpers a hoisted expression may call; they must exist outside the
# ``with`` block because hoists are evaluated once, outside render().
_HOIST_HELPERS = (CREATE_VNODE, CREATE_COMMENT, CREATE_TEXT, CREATE_STATIC)

_INVALID_ID_CHAR_RE = re.compile(r"[^A-Za-z0-9_]")


def to_valid_asset_id(name: str, kind: str) -> str:
    """``bar-baz`` → ``_component_bar_baz``."""
    return f"_{kind}_{_INVALID_ID_CHAR_RE.sub('_', name)}"


def preamble_helpers(ast: A.RootNode, gen_scope_id: bool) -> List[RuntimeHelper]:
    """Helpers to bind in the preamble, without touching ``ast.helpers``."""
    helpers = list(ast.helpers)
    if gen_scope_id:
        extra = [WITH_SCOPE_ID]
        if ast.hoists:
            extra += [PUSH_SCOPE_ID, POP_SCOPE_ID]
        helpers += [h for h in extra if h not in helpers]
    return helpers


def gen_helper_destructure(
    ctx: CodegenContext,
    helpers: Sequence[RuntimeHelper],
    source: str,
) -> str:
    """``const { a: _a, b: _b } = <source>`` (no trailing newline)."""
    names = [ctx.helper_name(h) for h in helpers]
    bindings = ", ".join(f"{name}: _{name}" for name in names)
    return f"const {{ {bindings} }} = {source}"


def gen_function_preamble(
    ast: A.RootNode,
    ctx: CodegenContext,
    printer: NodePrinter,
    use_with_block: bool,
) -> None:
    """Preamble for ``new Function()``-style output.

    With a ``with`` block the helpers are destructured inside it (from
    ``_Vue``) so each access skips the ``in`` check against the instance;
    otherwise they are destructured once here.
    """
    push = ctx.push
    if ctx.ssr:
        vue_binding = f"require({js_string(ctx.runtime_module_name)})"
    else:
        vue_binding = ctx.runtime_global_name

    if ast.helpers:
        if use_with_block:
            # save Vue in a separate variable to avoid collision
            push(f"const _Vue = {vue_binding}\n")
            # hoists are lifted out of the with block and need their helpers
            if ast.hoists:
                static_helpers = [h for h in ast.helpers if h in _HOIST_HELPERS]
                if static_helpers:
                    push(gen_helper_destructure(ctx, static_helpers, "_Vue") + "\n")
        else:
            push(gen_helper_destructure(ctx, ast.helpers, vue_binding) + "\n")

    gen_hoists(ast.hoists, ctx, printer)
    ctx.newline()


def gen_module_preamble(
    ast: A.RootNode,
    ctx: CodegenContext,
    printer: NodePrinter,
    gen_scope_id: bool,
) -> None:
    """Preamble for ES module output."""
    push = ctx.push
    helpers = preamble_helpers(ast, gen_scope_id)
    module = js_string(ctx.runtime_module_name)

    if helpers:
        names = [ctx.helper_name(h) for h in helpers]
        if ctx.optimize_bindings:
            # Calling an imported binding from a code-split chunk gets
            # rewritten to `Object(a.b)` / `(0,a.b)`; local consts avoid it.
            push(f"import {{ {', '.join(names)} }} from {module}\n")
            push(
                "\n// Binding optimization for webpack code-split\n"
                f"const {', '.join(f'_{name} = {name}' for name in names)}\n"
            )
        else:
            aliased = ", ".join(f"{name} as _{name}" for name in names)
            push(f"import {{ {aliased} }} from {module}\n")

    if ast.imports:
        gen_imports(ast.imports, ctx, printer)
        ctx.newline()

    if gen_scope_id:
        push(
            f"const _withId = {PURE_ANNOTATION}"
            f"{ctx.helper(WITH_SCOPE_ID)}({js_string(ctx.scope_id)})"
        )
        ctx.newline()

    gen_hoists(ast.hoists, ctx, printer, ctx.scope_id if gen_scope_id else None)
    ctx.newline()


def gen_imports(
    imports: Sequence[A.ImportItem],
    ctx: CodegenContext,
    printer: NodePrinter,
) -> None:
    for item in imports:
        ctx.push("import ")
        printer.gen_node(item.exp)
        ctx.push(f" from '{item.path}'")
        ctx.newline()


def gen_hoists(
    hoists: Sequence[A.Node],
    ctx: CodegenContext,
    printer: NodePrinter,
    scope_id: Optional[str] = None,
) -> None:
    if not hoists:
        return
    _log.debug("emitting %d hoisted expression(s)", len(hoists))
    ctx.newline()
    if scope_id is not None:
        ctx.push(f"{ctx.helper(PUSH_SCOPE_ID)}({js_string(scope_id)})")
        ctx.newline()
    for i, exp in enumerate(hoists):
        ctx.push(f"const _hoisted_{i + 1} = ")
        printer.gen_node(exp)
        ctx.newline()
    if scope_id is not None:
        ctx.push(f"{ctx.helper(POP_SCOPE_ID)}()")
        ctx.newline()


def gen_assets(assets: Sequence[str], kind: str, ctx: CodegenContext) -> None:
    """``const _component_Foo = _resolveComponent("Foo")``, one per line."""
    resolver = ctx.helper(
        RESOLVE_COMPONENT if kind == "component" else RESOLVE_DIRECTIVE
    )
    for i, name in enumerate(assets):
        ctx.push(
            f"const {to_valid_asset_id(name, kind)} = {resolver}({js_string(name)})"
        )
        if i < len(assets) - 1:
            ctx.newline()


def gen_temps(count: int, ctx: CodegenContext) -> None:
    """``let _temp0, _temp1, ...``"""
    ctx.push("let " + ", ".join(f"_temp{i}" for i in range(count)))
