# tests/test_printer.py
"""
Unit tests for the node printer and the codegen context, driven directly
without the generate() prologue.
"""

import pytest

from vcodegen.ast import (
    TextNode,
    create_array_expression,
    create_block_statement,
    create_call_expression,
    create_compound_expression,
    create_conditional_expression,
    create_function_expression,
    create_object_expression,
    create_object_property,
    create_return_statement,
    create_simple_expression,
    create_template_literal,
)
from vcodegen.codegen import CodegenOptions
from vcodegen.errors import UnknownNodeTypeError
from vcodegen.context import CodegenContext
from vcodegen.printer import NodePrinter, is_text, js_string
from vcodegen.runtime_helpers import CREATE_VNODE, RENDER_LIST
from tests.conftest import make_root


def _print(node) -> str:
    ctx = CodegenContext(make_root(), CodegenOptions())
    NodePrinter(ctx).gen_node(node)
    return ctx.code


class TestContext:

    def test_indent_and_deindent(self):
        ctx = CodegenContext(make_root(), CodegenOptions())
        ctx.push("{")
        ctx.indent()
        ctx.push("a")
        ctx.deindent()
        ctx.push("}")
        assert ctx.code == "{\n  a\n}"

    def test_deindent_without_newline(self):
        ctx = CodegenContext(make_root(), CodegenOptions())
        ctx.indent()
        ctx.deindent(True)
        assert ctx.indent_level == 0
        assert ctx.code == "\n  "

    def test_helper_alias_records_use_once(self):
        ctx = CodegenContext(make_root(), CodegenOptions())
        assert ctx.helper(CREATE_VNODE) == "_createVNode"
        assert ctx.helper(CREATE_VNODE) == "_createVNode"
        assert ctx.helper_name(RENDER_LIST) == "renderList"
        assert ctx.used_helpers == [CREATE_VNODE, RENDER_LIST]


class TestLiterals:

    def test_js_string_escapes(self):
        assert js_string('say "hi"\n') == '"say \\"hi\\"\\n"'

    def test_js_string_keeps_unicode(self):
        assert js_string("héllo") == '"héllo"'

    def test_static_expression_is_quoted(self):
        assert _print(create_simple_expression("foo", True)) == '"foo"'

    def test_dynamic_expression_is_verbatim(self):
        assert _print(create_simple_expression("a + b")) == "a + b"

    def test_text_is_quoted(self):
        assert _print(TextNode(content="hi")) == '"hi"'

    def test_raw_string_and_helper(self):
        assert _print("raw()") == "raw()"
        assert _print(CREATE_VNODE) == "_createVNode"

    def test_is_text(self):
        assert is_text("x")
        assert is_text(create_simple_expression("x"))
        assert not is_text(create_call_expression("foo"))


class TestObjects:

    def test_empty(self):
        assert _print(create_object_expression([])) == "{}"

    def test_single_simple_property_inline(self):
        obj = create_object_expression([
            create_object_property("id", create_simple_expression("foo", True))
        ])
        assert _print(obj) == '{ id: "foo" }'

    def test_single_complex_property_breaks(self):
        obj = create_object_expression([
            create_object_property("onClick", create_call_expression("handler"))
        ])
        assert _print(obj) == "{\n  onClick: handler()\n}"

    @pytest.mark.parametrize("key, expected", [
        ("id", "id"),
        ("$el", "$el"),
        ("some-key", '"some-key"'),
        ("1abc", '"1abc"'),
    ])
    def test_static_key_quoting(self, key, expected):
        obj = create_object_expression([
            create_object_property(key, create_simple_expression("x"))
        ])
        assert _print(obj) == f"{{ {expected}: x }}"

    def test_dynamic_key_is_computed(self):
        obj = create_object_expression([
            create_object_property(create_simple_expression("key"), create_simple_expression("x"))
        ])
        assert _print(obj) == "{ [key]: x }"


class TestArraysAndCalls:

    def test_short_text_array_inline(self):
        arr = create_array_expression([create_simple_expression("a"), "b"])
        assert _print(arr) == "[a, b]"

    def test_long_array_breaks(self):
        arr = create_array_expression(["a", "b", "c", "d"])
        assert _print(arr) == "[\n  a,\n  b,\n  c,\n  d\n]"

    def test_empty_array(self):
        assert _print(create_array_expression([])) == "[]"

    def test_call_with_helper_callee(self):
        call = create_call_expression(CREATE_VNODE, ['"div"', "null"])
        assert _print(call) == '_createVNode("div", null)'

    def test_numeric_argument(self):
        call = create_call_expression(CREATE_VNODE, ['"div"', "null", 16])
        assert _print(call) == '_createVNode("div", null, 16)'

    def test_numbers_are_text_but_bools_are_not(self):
        assert is_text(16)
        assert not is_text(True)
        with pytest.raises(UnknownNodeTypeError):
            _print(True)

    def test_call_nested_list_argument(self):
        call = create_call_expression("h", [[create_simple_expression("a")]])
        assert _print(call) == "h([a])"


class TestFunctions:

    def test_params_and_returns(self):
        fn = create_function_expression(
            [create_simple_expression("item"), "i"],
            create_call_expression("foo", ["item"]),
        )
        assert _print(fn) == "(item, i) => foo(item)"

    def test_newline_wraps_in_block(self):
        fn = create_function_expression("x", create_simple_expression("x"), newline=True)
        assert _print(fn) == "(x) => {\n  return x\n}"

    def test_list_returns_print_as_array(self):
        fn = create_function_expression(None, [create_simple_expression("a")])
        assert _print(fn) == "() => [a]"

    def test_no_returns(self):
        assert _print(create_function_expression()) == "() => {}"

    def test_block_body(self):
        fn = create_function_expression("x")
        fn.body = create_block_statement([create_return_statement(create_simple_expression("x"))])
        assert _print(fn) == "(x) => {\n  return x\n}"


class TestMisc:

    def test_conditional_parenthesizes_complex_test(self):
        cond = create_conditional_expression(
            create_simple_expression("a > 1"),
            create_simple_expression("b"),
            create_simple_expression("c"),
        )
        assert _print(cond) == "(a > 1)\n  ? b\n  : c"

    def test_conditional_compound_test(self):
        cond = create_conditional_expression(
            create_compound_expression(["_ctx.", create_simple_expression("ok")]),
            create_simple_expression("b"),
            create_simple_expression("c"),
        )
        assert _print(cond).startswith("(_ctx.ok)\n")

    def test_template_literal_escapes(self):
        lit = create_template_literal(["a`b${c}\\"])
        assert _print(lit) == "`a\\`b\\${c}\\\\`"

    def test_empty_block(self):
        assert _print(create_block_statement([])) == "{}"

    def test_return_statement(self):
        ret = create_return_statement([create_simple_expression("a"), "b"])
        assert _print(ret) == "return [a, b]"
