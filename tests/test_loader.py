# tests/test_loader.py
"""Tests for decoding JSON IR documents into node trees."""

import json

import pytest

from vcodegen import generate
from vcodegen.ast import (
    CacheExpression,
    ElementNode,
    ImportItem,
    InterpolationNode,
    RootNode,
    SimpleExpressionNode,
    create_interpolation,
    create_root,
)
from vcodegen.errors import IRLoadError, MalformedIRError
from vcodegen.loader import load_node, load_root, load_root_file
from vcodegen.runtime_helpers import CREATE_VNODE, TO_DISPLAY_STRING
from tests.conftest import ELEMENT_DOC, INTERPOLATION_DOC


class TestLoadRoot:

    def test_interpolation_document(self):
        root = load_root(INTERPOLATION_DOC)
        assert isinstance(root, RootNode)
        assert root.helpers == [TO_DISPLAY_STRING]
        assert isinstance(root.codegen_node, InterpolationNode)
        assert root.codegen_node.content == SimpleExpressionNode(content="msg")

    def test_same_output_as_factories(self):
        built = create_root(
            helpers=[TO_DISPLAY_STRING],
            codegen_node=create_interpolation("msg"),
        )
        loaded = load_root(json.dumps(INTERPOLATION_DOC))
        for mode in ("function", "module"):
            assert generate(loaded, mode=mode).code == generate(built, mode=mode).code

    def test_element_document(self):
        root = load_root(ELEMENT_DOC)
        assert root.helpers == [CREATE_VNODE]
        assert root.components == ["Foo"]
        element = root.codegen_node
        assert isinstance(element, ElementNode)
        assert element.codegen_node.callee is CREATE_VNODE
        code = generate(root, mode="module").code
        assert 'const _hoisted_1 = { id: "foo" }' in code
        assert 'return _createVNode("div", _hoisted_1)' in code

    def test_snake_case_fields(self):
        node = load_node({"type": "SIMPLE_EXPRESSION", "content": "x", "is_static": True})
        assert node.is_static is True

    def test_is_vnode_field(self):
        node = load_node({
            "type": "JS_CACHE_EXPRESSION",
            "index": 0,
            "value": {"type": "SIMPLE_EXPRESSION", "content": "x"},
            "isVNode": True,
        })
        assert isinstance(node, CacheExpression)
        assert node.is_vnode is True

    def test_imports(self):
        root = load_root({
            "type": "ROOT",
            "imports": [{"exp": "_imports_0", "path": "./a.png"}],
        })
        assert root.imports == [ImportItem(exp="_imports_0", path="./a.png")]

    def test_location(self):
        node = load_node({
            "type": "TEXT",
            "content": "hi",
            "loc": {"source": "hi", "start": {"line": 2, "column": 4}},
        })
        assert node.loc.start.line == 2
        assert node.loc.start.column == 4
        assert node.loc.source == "hi"

    def test_load_root_file(self, write_ir):
        path = write_ir(INTERPOLATION_DOC)
        assert load_root_file(path).helpers == [TO_DISPLAY_STRING]

    def test_numeric_arguments(self):
        root = load_root({
            "type": "ROOT",
            "helpers": ["createVNode"],
            "codegenNode": {
                "type": "JS_CALL_EXPRESSION",
                "callee": {"helper": "createVNode"},
                "arguments": ["\"div\"", "null", 16],
            },
        })
        code = generate(root, mode="module", prefix_identifiers=True).code
        assert 'return _createVNode("div", null, 16)' in code


class TestLoadErrors:

    def test_invalid_json(self):
        with pytest.raises(IRLoadError) as exc_info:
            load_root("{not json")
        assert isinstance(exc_info.value.cause, json.JSONDecodeError)

    def test_is_malformed_ir(self):
        assert issubclass(IRLoadError, MalformedIRError)

    @pytest.mark.parametrize("doc, message", [
        ({"content": "x"}, "'type' member"),
        ({"type": "NOPE"}, "unknown node type"),
        ({"type": "TEXT", "content": "x", "bogus": 1}, "no field"),
        ({"type": "ROOT", "helpers": ["noSuchHelper"]}, "unknown runtime helper"),
        ({"type": "ROOT", "helpers": [3]}, "must be a name"),
        ({"type": "TEXT"}, "invalid TEXT node"),
        ({"type": "ROOT", "imports": [{"exp": "a"}]}, "invalid import"),
        ({"type": "TEXT", "content": "x", "loc": 5}, "loc must be an object"),
        ({"type": "ROOT", "components": "Foo"}, "ROOT.components must be a list of names"),
        ({"type": "ROOT", "directives": [1]}, "ROOT.directives must be a list of names"),
        ({"type": "ROOT", "temps": "3"}, "ROOT.temps must be an integer"),
        ({"type": "ROOT", "cached": True}, "ROOT.cached must be an integer"),
        ({"type": "ROOT", "helpers": "toDisplayString"}, "ROOT.helpers must be a list"),
        ({"type": "SIMPLE_EXPRESSION", "content": "x", "isStatic": "yes"},
         "SIMPLE_EXPRESSION.isStatic must be a boolean"),
        ({"type": "JS_CACHE_EXPRESSION", "index": "0", "value": "x"},
         "JS_CACHE_EXPRESSION.index must be an integer"),
        ({"type": "JS_CACHE_EXPRESSION", "index": 0, "value": "x", "isVNode": 1},
         "JS_CACHE_EXPRESSION.isVNode must be a boolean"),
    ])
    def test_bad_documents(self, doc, message):
        with pytest.raises(IRLoadError, match=message):
            load_root(doc)

    def test_root_must_be_root(self):
        with pytest.raises(IRLoadError, match="must be a ROOT node"):
            load_root({"type": "TEXT", "content": "x"})
