#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
vcodegen/context.py
===================

Mutable state threaded through one generation pass.

The context owns the output buffer, the current indentation depth, the
resolved options and the record of helpers printed so far.  A fresh context
is built for every call to :func:`vcodegen.codegen.generate`, so generation
never shares state between units.
"""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, List, Optional

from vcodegen.errors import UnknownHelperError
from vcodegen.runtime_helpers import HELPER_NAME_MAP, RuntimeHelper

if TYPE_CHECKING:
    from vcodegen.ast import Node, RootNode
    from vcodegen.codegen import CodegenOptions

__all__ = ["CodegenContext", "INDENT"]

#: One level of indentation in generated code.
INDENT = "  "


class CodegenContext:
    """Output buffer plus the naming and formatting state of one pass.

    Indentation is applied lazily: ``indent()`` / ``deindent()`` adjust the
    level and (normally) start a new line, and every ``newline()`` writes
    the current level's worth of spaces.
    """

    def __init__(self, ast: "RootNode", options: "CodegenOptions") -> None:
        self.ast = ast
        self.mode = options.mode
        self.prefix_identifiers = options.prefix_identifiers
        self.optimize_bindings = options.optimize_bindings
        self.ssr = options.ssr
        self.scope_id = options.scope_id
        self.runtime_global_name = options.runtime_global_name
        self.runtime_module_name = options.runtime_module_name

        self.indent_level = 0
        self.used_helpers: List[RuntimeHelper] = []
        self._buffer = StringIO()

    @property
    def code(self) -> str:
        """Everything pushed so far."""
        return self._buffer.getvalue()

    def helper(self, key: RuntimeHelper) -> str:
        """Return the local alias (``_name``) of a runtime helper."""
        return f"_{self.helper_name(key)}"

    def helper_name(self, key: RuntimeHelper) -> str:
        """Return the canonical runtime name of a helper and mark it used."""
        try:
            name = HELPER_NAME_MAP[key]
        except (KeyError, TypeError):
            raise UnknownHelperError(key) from None
        if key not in self.used_helpers:
            self.used_helpers.append(key)
        return name

    def push(self, code: str, node: Optional["Node"] = None) -> None:
        # node is accepted for source-map builders; spans are not tracked here
        self._buffer.write(code)

    def indent(self) -> None:
        self.indent_level += 1
        self.newline()

    def deindent(self, without_newline: bool = False) -> None:
        self.indent_level -= 1
        if not without_newline:
            self.newline()

    def newline(self) -> None:
        self._newline(self.indent_level)

    def _newline(self, n: int) -> None:
        self._buffer.write("\n" + INDENT * n)
