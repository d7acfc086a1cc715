# tests/test_preamble.py
"""Tests for helper bindings, asset ids and hoist printing."""

import pytest

from vcodegen.ast import create_simple_expression
from vcodegen.codegen import CodegenOptions
from vcodegen.context import CodegenContext
from vcodegen.preamble import (
    gen_assets,
    gen_helper_destructure,
    gen_hoists,
    gen_temps,
    preamble_helpers,
    to_valid_asset_id,
)
from vcodegen.printer import NodePrinter
from vcodegen.runtime_helpers import (
    CREATE_VNODE,
    POP_SCOPE_ID,
    PUSH_SCOPE_ID,
    WITH_SCOPE_ID,
)
from tests.conftest import make_root


def _context(**options) -> CodegenContext:
    return CodegenContext(make_root(), CodegenOptions(**options))


class TestAssetIds:

    @pytest.mark.parametrize("name, kind, expected", [
        ("Foo", "component", "_component_Foo"),
        ("bar-baz", "component", "_component_bar_baz"),
        ("my_dir", "directive", "_directive_my_dir"),
        ("a.b:c", "component", "_component_a_b_c"),
    ])
    def test_sanitized(self, name, kind, expected):
        assert to_valid_asset_id(name, kind) == expected

    def test_assets_one_per_line(self):
        ctx = _context()
        gen_assets(["A", "b-c"], "component", ctx)
        assert ctx.code == (
            'const _component_A = _resolveComponent("A")\n'
            'const _component_b_c = _resolveComponent("b-c")'
        )


class TestPreambleHelpers:

    def test_plain(self):
        root = make_root(helpers=[CREATE_VNODE])
        assert preamble_helpers(root, False) == [CREATE_VNODE]

    def test_scope_id_without_hoists(self):
        root = make_root(helpers=[CREATE_VNODE])
        assert preamble_helpers(root, True) == [CREATE_VNODE, WITH_SCOPE_ID]

    def test_scope_id_with_hoists(self):
        root = make_root(hoists=[create_simple_expression("x")])
        assert preamble_helpers(root, True) == [WITH_SCOPE_ID, PUSH_SCOPE_ID, POP_SCOPE_ID]

    def test_no_duplicates(self):
        root = make_root(helpers=[WITH_SCOPE_ID])
        assert preamble_helpers(root, True) == [WITH_SCOPE_ID]


class TestEmitters:

    def test_destructure(self):
        ctx = _context()
        assert gen_helper_destructure(ctx, [CREATE_VNODE], "_Vue") == (
            "const { createVNode: _createVNode } = _Vue"
        )

    def test_hoists_numbered_from_one(self):
        ctx = _context()
        hoists = [create_simple_expression("a"), create_simple_expression("b", True)]
        gen_hoists(hoists, ctx, NodePrinter(ctx))
        assert ctx.code == '\nconst _hoisted_1 = a\nconst _hoisted_2 = "b"\n'

    def test_no_hoists_prints_nothing(self):
        ctx = _context()
        gen_hoists([], ctx, NodePrinter(ctx), scope_id="data-v-1")
        assert ctx.code == ""

    def test_temps(self):
        ctx = _context()
        gen_temps(2, ctx)
        assert ctx.code == "let _temp0, _temp1"
