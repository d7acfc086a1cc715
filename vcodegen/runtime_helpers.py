"""vcodegen/runtime_helpers.py — runtime helper symbols.

A helper is a function exported by the runtime (vnode creation, asset
resolution, list rendering, ...).  The transform stage refers to helpers by
symbol; the generator turns each symbol into its canonical runtime name via
``HELPER_NAME_MAP`` and prints it under a local ``_<name>`` alias.

Symbols compare by identity, so two helpers that happen to share a
description are still distinct.  Downstream compilers (DOM, SSR) add their
own helpers through :func:`register_runtime_helpers`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

__all__ = [
    "RuntimeHelper",
    "HELPER_NAME_MAP",
    "register_runtime_helpers",
    "helper_by_name",
    "FRAGMENT",
    "PORTAL",
    "SUSPENSE",
    "KEEP_ALIVE",
    "BASE_TRANSITION",
    "OPEN_BLOCK",
    "CREATE_BLOCK",
    "CREATE_VNODE",
    "CREATE_COMMENT",
    "CREATE_TEXT",
    "CREATE_STATIC",
    "RESOLVE_COMPONENT",
    "RESOLVE_DYNAMIC_COMPONENT",
    "RESOLVE_DIRECTIVE",
    "WITH_DIRECTIVES",
    "RENDER_LIST",
    "RENDER_SLOT",
    "CREATE_SLOTS",
    "TO_DISPLAY_STRING",
    "MERGE_PROPS",
    "TO_HANDLERS",
    "CAMELIZE",
    "SET_BLOCK_TRACKING",
    "WITH_SCOPE_ID",
    "PUSH_SCOPE_ID",
    "POP_SCOPE_ID",
    "WITH_CTX",
]


@dataclass(frozen=True, eq=False)
class RuntimeHelper:
    """An opaque helper symbol; ``description`` is for debugging only."""

    description: str

    def __repr__(self) -> str:
        return f"RuntimeHelper({self.description})"


FRAGMENT = RuntimeHelper("Fragment")
PORTAL = RuntimeHelper("Portal")
SUSPENSE = RuntimeHelper("Suspense")
KEEP_ALIVE = RuntimeHelper("KeepAlive")
BASE_TRANSITION = RuntimeHelper("BaseTransition")
OPEN_BLOCK = RuntimeHelper("openBlock")
CREATE_BLOCK = RuntimeHelper("createBlock")
CREATE_VNODE = RuntimeHelper("createVNode")
CREATE_COMMENT = RuntimeHelper("createCommentVNode")
CREATE_TEXT = RuntimeHelper("createTextVNode")
CREATE_STATIC = RuntimeHelper("createStaticVNode")
RESOLVE_COMPONENT = RuntimeHelper("resolveComponent")
RESOLVE_DYNAMIC_COMPONENT = RuntimeHelper("resolveDynamicComponent")
RESOLVE_DIRECTIVE = RuntimeHelper("resolveDirective")
WITH_DIRECTIVES = RuntimeHelper("withDirectives")
RENDER_LIST = RuntimeHelper("renderList")
RENDER_SLOT = RuntimeHelper("renderSlot")
CREATE_SLOTS = RuntimeHelper("createSlots")
TO_DISPLAY_STRING = RuntimeHelper("toDisplayString")
MERGE_PROPS = RuntimeHelper("mergeProps")
TO_HANDLERS = RuntimeHelper("toHandlers")
CAMELIZE = RuntimeHelper("camelize")
SET_BLOCK_TRACKING = RuntimeHelper("setBlockTracking")
WITH_SCOPE_ID = RuntimeHelper("withScopeId")
PUSH_SCOPE_ID = RuntimeHelper("pushScopeId")
POP_SCOPE_ID = RuntimeHelper("popScopeId")
WITH_CTX = RuntimeHelper("withCtx")

# Name mapping for runtime helpers that need to be imported from 'vue' in
# generated code. Make sure these are correctly exported in the runtime!
HELPER_NAME_MAP: Dict[RuntimeHelper, str] = {
    FRAGMENT: "Fragment",
    PORTAL: "Portal",
    SUSPENSE: "Suspense",
    KEEP_ALIVE: "KeepAlive",
    BASE_TRANSITION: "BaseTransition",
    OPEN_BLOCK: "openBlock",
    CREATE_BLOCK: "createBlock",
    CREATE_VNODE: "createVNode",
    CREATE_COMMENT: "createCommentVNode",
    CREATE_TEXT: "createTextVNode",
    CREATE_STATIC: "createStaticVNode",
    RESOLVE_COMPONENT: "resolveComponent",
    RESOLVE_DYNAMIC_COMPONENT: "resolveDynamicComponent",
    RESOLVE_DIRECTIVE: "resolveDirective",
    WITH_DIRECTIVES: "withDirectives",
    RENDER_LIST: "renderList",
    RENDER_SLOT: "renderSlot",
    CREATE_SLOTS: "createSlots",
    TO_DISPLAY_STRING: "toDisplayString",
    MERGE_PROPS: "mergeProps",
    TO_HANDLERS: "toHandlers",
    CAMELIZE: "camelize",
    SET_BLOCK_TRACKING: "setBlockTracking",
    WITH_SCOPE_ID: "withScopeId",
    PUSH_SCOPE_ID: "pushScopeId",
    POP_SCOPE_ID: "popScopeId",
    WITH_CTX: "withCtx",
}


def register_runtime_helpers(helpers: Mapping[RuntimeHelper, str]) -> None:
    """Register additional helper symbols with their runtime names."""
    for symbol, name in helpers.items():
        HELPER_NAME_MAP[symbol] = name


def helper_by_name(name: str) -> RuntimeHelper:
    """Look up a registered helper by its runtime name.

    Raises ``KeyError`` when no registered helper carries *name*.
    """
    for symbol, registered in HELPER_NAME_MAP.items():
        if registered == name:
            return symbol
    raise KeyError(name)
