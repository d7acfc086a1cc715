"""vcodegen/loader.py — build an IR tree from a JSON document.

The document mirrors the node dataclasses: every node is an object with a
``"type"`` member naming a :class:`~vcodegen.ast.NodeTypes` member and the
node's fields as the remaining members.  Field names may be written in
snake_case (``is_static``) or camelCase (``isStatic``).  Helper references
are written ``{"helper": "createVNode"}``; the root's ``helpers`` list may
hold bare helper names.

Example::

    {
      "type": "ROOT",
      "helpers": ["toDisplayString"],
      "codegenNode": {
        "type": "INTERPOLATION",
        "content": {"type": "SIMPLE_EXPRESSION", "content": "msg"}
      }
    }
"""

from __future__ import annotations

import dataclasses
import json
import re
from pathlib import Path
from typing import Any, Dict, Union

from vcodegen import ast as A
from vcodegen.errors import IRLoadError
from vcodegen.runtime_helpers import RuntimeHelper, helper_by_name

__all__ = ["load_root", "load_root_file", "load_node"]

_NODE_CLASSES: Dict[A.NodeTypes, type] = {
    cls.type: cls
    for cls in (
        A.RootNode,
        A.ElementNode,
        A.TextNode,
        A.CommentNode,
        A.SimpleExpressionNode,
        A.InterpolationNode,
        A.CompoundExpressionNode,
        A.IfBranchNode,
        A.IfNode,
        A.ForNode,
        A.CallExpression,
        A.Property,
        A.ObjectExpression,
        A.ArrayExpression,
        A.FunctionExpression,
        A.SequenceExpression,
        A.ConditionalExpression,
        A.CacheExpression,
        A.BlockStatement,
        A.TemplateLiteral,
        A.IfStatement,
        A.AssignmentExpression,
        A.ReturnStatement,
    )
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

# camelCase names that do not split on every capital
_FIELD_ALIASES = {"isVNode": "is_vnode"}

# scalar fields checked before construction; dataclasses do not enforce types
_BOOL_FIELDS = frozenset({"is_static", "is_vnode", "newline"})
_INT_FIELDS = frozenset({"cached", "temps", "index"})
_NAME_LIST_FIELDS = frozenset({"components", "directives"})


def _snake(name: str) -> str:
    if name in _FIELD_ALIASES:
        return _FIELD_ALIASES[name]
    return _CAMEL_RE.sub("_", name).lower()


def _helper(name: Any) -> RuntimeHelper:
    if not isinstance(name, str):
        raise IRLoadError(f"helper reference must be a name, got {name!r}")
    try:
        return helper_by_name(name)
    except KeyError:
        raise IRLoadError(f"unknown runtime helper {name!r}") from None


def _location(data: Any) -> A.SourceLocation:
    if not isinstance(data, dict):
        raise IRLoadError(f"loc must be an object, got {data!r}")
    start = data.get("start") or {}
    end = data.get("end") or {}
    return A.SourceLocation(
        source=data.get("source", ""),
        start=A.Position(**{k: start[k] for k in ("offset", "line", "column") if k in start}),
        end=A.Position(**{k: end[k] for k in ("offset", "line", "column") if k in end}),
    )


def _check_field(node_type: A.NodeTypes, key: str, name: str, raw: Any) -> None:
    where = f"{node_type.name}.{key}"
    if name in _BOOL_FIELDS and not isinstance(raw, bool):
        raise IRLoadError(f"{where} must be a boolean, got {raw!r}")
    if name in _INT_FIELDS and (not isinstance(raw, int) or isinstance(raw, bool)):
        raise IRLoadError(f"{where} must be an integer, got {raw!r}")
    if name in _NAME_LIST_FIELDS and (
        not isinstance(raw, list) or not all(isinstance(item, str) for item in raw)
    ):
        raise IRLoadError(f"{where} must be a list of names, got {raw!r}")
    if name in ("helpers", "imports", "hoists") and not isinstance(raw, list):
        raise IRLoadError(f"{where} must be a list, got {raw!r}")


def _value(data: Any) -> Any:
    """Convert one JSON value: nodes, helper refs, lists, or scalars."""
    if isinstance(data, list):
        return [_value(item) for item in data]
    if isinstance(data, dict):
        if "helper" in data and "type" not in data:
            return _helper(data["helper"])
        return load_node(data)
    return data


def load_node(data: Dict[str, Any]) -> A.Node:
    """Build a single node (and its subtree) from a decoded JSON object."""
    if not isinstance(data, dict) or "type" not in data:
        raise IRLoadError(f"expected a node object with a 'type' member, got {data!r}")
    try:
        node_type = A.NodeTypes[data["type"]]
        cls = _NODE_CLASSES[node_type]
    except KeyError:
        raise IRLoadError(f"unknown node type {data['type']!r}") from None

    fields = {f.name: f for f in dataclasses.fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, raw in data.items():
        if key == "type":
            continue
        name = _snake(key)
        if name not in fields:
            raise IRLoadError(f"{node_type.name} node has no field {key!r}")
        _check_field(node_type, key, name, raw)
        if name == "loc":
            kwargs[name] = _location(raw)
        elif cls is A.RootNode and name == "helpers":
            kwargs[name] = [_helper(h["helper"] if isinstance(h, dict) else h) for h in raw]
        elif cls is A.RootNode and name == "imports":
            try:
                kwargs[name] = [
                    A.ImportItem(exp=_value(item["exp"]), path=item["path"])
                    for item in raw
                ]
            except (KeyError, TypeError) as exc:
                raise IRLoadError(f"invalid import entry: {exc}", cause=exc) from exc
        else:
            kwargs[name] = _value(raw)

    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise IRLoadError(f"invalid {node_type.name} node: {exc}", cause=exc) from exc


def load_root(data: Union[str, Dict[str, Any]]) -> A.RootNode:
    """Build a ``RootNode`` from a JSON string or decoded document."""
    if isinstance(data, str):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise IRLoadError(f"invalid JSON: {exc}", cause=exc) from exc
    node = load_node(data)
    if not isinstance(node, A.RootNode):
        raise IRLoadError(f"document root must be a ROOT node, got {node.type.name}")
    return node


def load_root_file(path: Union[str, Path]) -> A.RootNode:
    """Read and decode an IR document from *path*."""
    text = Path(path).read_text(encoding="utf-8")
    return load_root(text)
