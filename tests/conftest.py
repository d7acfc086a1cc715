# tests/conftest.py
"""Shared builders and fixtures for the code generator tests."""

from __future__ import annotations

import json
from typing import Any, Dict, Sequence

import pytest

from vcodegen.ast import (
    CallExpression,
    ElementNode,
    RootNode,
    create_root,
    create_simple_expression,
)
from vcodegen.runtime_helpers import CREATE_VNODE, HELPER_NAME_MAP


def make_root(**fields: Any) -> RootNode:
    """A root whose body defaults to the dynamic expression ``null``."""
    fields.setdefault("codegen_node", create_simple_expression("null"))
    return create_root(**fields)


def create_element_with_codegen(args: Sequence[Any]) -> ElementNode:
    """An element already lowered to ``createVNode(...)``."""
    return ElementNode(
        tag="div",
        codegen_node=CallExpression(callee=CREATE_VNODE, arguments=list(args)),
    )


# ── Serialized IR documents ──────────────────────────────────────────────

INTERPOLATION_DOC: Dict[str, Any] = {
    "type": "ROOT",
    "helpers": ["toDisplayString"],
    "codegenNode": {
        "type": "INTERPOLATION",
        "content": {"type": "SIMPLE_EXPRESSION", "content": "msg"},
    },
}

ELEMENT_DOC: Dict[str, Any] = {
    "type": "ROOT",
    "helpers": ["createVNode"],
    "components": ["Foo"],
    "hoists": [
        {
            "type": "JS_OBJECT_EXPRESSION",
            "properties": [
                {
                    "type": "JS_PROPERTY",
                    "key": {"type": "SIMPLE_EXPRESSION", "content": "id", "isStatic": True},
                    "value": {"type": "SIMPLE_EXPRESSION", "content": "foo", "isStatic": True},
                }
            ],
        }
    ],
    "codegenNode": {
        "type": "ELEMENT",
        "tag": "div",
        "codegenNode": {
            "type": "JS_CALL_EXPRESSION",
            "callee": {"helper": "createVNode"},
            "arguments": ['"div"', "_hoisted_1"],
        },
    },
}


@pytest.fixture
def write_ir(tmp_path):
    """Write a document (dict or raw text) to a temp file and return its path."""

    def _write(doc: Any, name: str = "root.ir.json"):
        path = tmp_path / name
        text = doc if isinstance(doc, str) else json.dumps(doc)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_helpers():
    """Undo helper registrations made during a test."""
    saved = dict(HELPER_NAME_MAP)
    yield
    HELPER_NAME_MAP.clear()
    HELPER_NAME_MAP.update(saved)
