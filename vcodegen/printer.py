#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
vcodegen/printer.py
===================

Recursive node printer: IR node → JavaScript text appended to a
:class:`~vcodegen.context.CodegenContext`.

Dispatch is keyed on the node's Python type (``_NODE_DISPATCH``); a type
missing from the table is a contract violation by the transform stage and
raises :class:`~vcodegen.errors.UnknownNodeTypeError`.

Formatting rules
----------------
Whether a nested construct breaks over several lines is decided by the
printer of the construct itself, never by its parent:

- objects break when they hold more than one property or any non-simple
  value; a single simple property prints as ``{ key: value }``
- node lists printed as arrays break when they hold more than three
  elements or any element that is not text-like
- call arguments and sequence members always stay comma-separated on the
  current line
- conditionals put ``?`` / ``:`` on indented lines, nested alternates
  stepping in one more level each
"""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Sequence, Union

from vcodegen import ast as A
from vcodegen.context import CodegenContext
from vcodegen.errors import MalformedIRError, SourceSpan, UnknownNodeTypeError
from vcodegen.runtime_helpers import (
    CREATE_COMMENT,
    SET_BLOCK_TRACKING,
    TO_DISPLAY_STRING,
    RuntimeHelper,
)

__all__ = ["NodePrinter", "js_string", "is_text"]


_NODE_DISPATCH: Dict[type, str] = {
    A.ElementNode: "gen_codegen_wrapper",
    A.IfNode: "gen_codegen_wrapper",
    A.ForNode: "gen_codegen_wrapper",
    A.TextNode: "gen_text",
    A.SimpleExpressionNode: "gen_expression",
    A.InterpolationNode: "gen_interpolation",
    A.CompoundExpressionNode: "gen_compound_expression",
    A.CommentNode: "gen_comment",
    A.CallExpression: "gen_call_expression",
    A.ObjectExpression: "gen_object_expression",
    A.ArrayExpression: "gen_array_expression",
    A.FunctionExpression: "gen_function_expression",
    A.SequenceExpression: "gen_sequence_expression",
    A.ConditionalExpression: "gen_conditional_expression",
    A.CacheExpression: "gen_cache_expression",
    A.BlockStatement: "gen_block_statement",
    A.TemplateLiteral: "gen_template_literal",
    A.IfStatement: "gen_if_statement",
    A.AssignmentExpression: "gen_assignment_expression",
    A.ReturnStatement: "gen_return_statement",
}

_TEXT_TYPES = (
    A.SimpleExpressionNode,
    A.CompoundExpressionNode,
    A.TextNode,
    A.InterpolationNode,
)

_TEMPLATE_ESCAPE_RE = re.compile(r"(`|\$|\\)")

ListItem = Union[str, RuntimeHelper, A.Node, Sequence[A.Node]]


def js_string(value: str) -> str:
    """Quote *value* as a double-quoted JavaScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def _is_number(node: Any) -> bool:
    return isinstance(node, int) and not isinstance(node, bool)


def is_text(node: Any) -> bool:
    return isinstance(node, (str, *_TEXT_TYPES)) or _is_number(node)


class NodePrinter:
    """Print IR nodes into a codegen context."""

    def __init__(self, context: CodegenContext) -> None:
        self.ctx = context

    # --- Dispatch ---

    def gen_node(self, node: Union[str, int, RuntimeHelper, A.Node]) -> None:
        if isinstance(node, str):
            self.ctx.push(node)
            return
        if _is_number(node):
            # patch flags and similar numeric arguments
            self.ctx.push(str(node))
            return
        if isinstance(node, RuntimeHelper):
            self.ctx.push(self.ctx.helper(node))
            return
        method_name = _NODE_DISPATCH.get(type(node))
        if method_name is None:
            raise UnknownNodeTypeError(node)
        getattr(self, method_name)(node)

    # --- Lists ---

    def gen_node_list(
        self,
        nodes: Sequence[ListItem],
        multilines: bool = False,
        comma: bool = True,
    ) -> None:
        push = self.ctx.push
        for i, node in enumerate(nodes):
            if isinstance(node, (list, tuple)):
                self.gen_node_list_as_array(node)
            else:
                self.gen_node(node)
            if i < len(nodes) - 1:
                if multilines:
                    if comma:
                        push(",")
                    self.ctx.newline()
                elif comma:
                    push(", ")

    def gen_node_list_as_array(self, nodes: Sequence[ListItem]) -> None:
        multilines = len(nodes) > 3 or any(
            isinstance(n, (list, tuple)) or not is_text(n) for n in nodes
        )
        self.ctx.push("[")
        if multilines:
            self.ctx.indent()
        self.gen_node_list(nodes, multilines)
        if multilines:
            self.ctx.deindent()
        self.ctx.push("]")

    def gen_statements(self, block: A.BlockStatement) -> None:
        """Print a block's statements without braces, one per line."""
        self.gen_node_list(block.body, multilines=True, comma=False)

    # --- Template nodes ---

    def gen_codegen_wrapper(self, node: A.Node) -> None:
        codegen_node = getattr(node, "codegen_node", None)
        if codegen_node is None:
            raise MalformedIRError(
                f"codegen node is missing for {node.type.name.lower()} node",
                span=SourceSpan.from_node(node),
                hint="apply the element / if / for transforms first",
            )
        self.gen_node(codegen_node)

    def gen_text(self, node: A.TextNode) -> None:
        self.ctx.push(js_string(node.content), node)

    def gen_expression(self, node: A.SimpleExpressionNode) -> None:
        text = js_string(node.content) if node.is_static else node.content
        self.ctx.push(text, node)

    def gen_interpolation(self, node: A.InterpolationNode) -> None:
        self.ctx.push(f"{self.ctx.helper(TO_DISPLAY_STRING)}(")
        self.gen_node(node.content)
        self.ctx.push(")")

    def gen_compound_expression(self, node: A.CompoundExpressionNode) -> None:
        for child in node.children:
            self.gen_node(child)

    def gen_expression_as_property_key(self, node: A.Node) -> None:
        push = self.ctx.push
        if isinstance(node, A.CompoundExpressionNode):
            push("[")
            self.gen_compound_expression(node)
            push("]")
        elif isinstance(node, A.SimpleExpressionNode) and node.is_static:
            # only quote keys if necessary
            text = (
                node.content
                if A.is_simple_identifier(node.content)
                else js_string(node.content)
            )
            push(text, node)
        elif isinstance(node, A.SimpleExpressionNode):
            push(f"[{node.content}]", node)
        else:
            raise UnknownNodeTypeError(node)

    def gen_comment(self, node: A.CommentNode) -> None:
        self.ctx.push(
            f"{self.ctx.helper(CREATE_COMMENT)}({js_string(node.content)})", node
        )

    # --- JavaScript expressions ---

    def gen_call_expression(self, node: A.CallExpression) -> None:
        callee = (
            node.callee if isinstance(node.callee, str) else self.ctx.helper(node.callee)
        )
        self.ctx.push(callee + "(", node)
        self.gen_node_list(node.arguments)
        self.ctx.push(")")

    def gen_object_expression(self, node: A.ObjectExpression) -> None:
        ctx = self.ctx
        properties = node.properties
        for prop in properties:
            if not isinstance(prop, A.Property):
                raise UnknownNodeTypeError(prop)
        if not properties:
            ctx.push("{}", node)
            return
        multilines = len(properties) > 1 or any(
            not isinstance(p.value, A.SimpleExpressionNode) for p in properties
        )
        ctx.push("{" if multilines else "{ ")
        if multilines:
            ctx.indent()
        for i, prop in enumerate(properties):
            # key
            self.gen_expression_as_property_key(prop.key)
            ctx.push(": ")
            # value
            self.gen_node(prop.value)
            if i < len(properties) - 1:
                # will only reach this if it's multilines
                ctx.push(",")
                ctx.newline()
        if multilines:
            ctx.deindent()
        ctx.push("}" if multilines else " }")

    def gen_array_expression(self, node: A.ArrayExpression) -> None:
        self.gen_node_list_as_array(node.elements)

    def gen_function_expression(self, node: A.FunctionExpression) -> None:
        ctx = self.ctx
        ctx.push("(", node)
        if isinstance(node.params, (list, tuple)):
            self.gen_node_list(node.params)
        elif node.params:
            self.gen_node(node.params)
        ctx.push(") => ")
        if node.returns is None:
            if node.body is not None:
                self.gen_block_statement(node.body)
            else:
                ctx.push("{}")
            return
        if node.newline:
            ctx.push("{")
            ctx.indent()
            ctx.push("return ")
        if isinstance(node.returns, (list, tuple)):
            self.gen_node_list_as_array(node.returns)
        else:
            self.gen_node(node.returns)
        if node.newline:
            ctx.deindent()
            ctx.push("}")

    def gen_sequence_expression(self, node: A.SequenceExpression) -> None:
        self.ctx.push("(")
        self.gen_node_list(node.expressions)
        self.ctx.push(")")

    def gen_conditional_expression(self, node: A.ConditionalExpression) -> None:
        ctx = self.ctx
        test = node.test
        if isinstance(test, A.SimpleExpressionNode):
            needs_parens = not A.is_simple_identifier(test.content)
            if needs_parens:
                ctx.push("(")
            self.gen_expression(test)
            if needs_parens:
                ctx.push(")")
        else:
            ctx.push("(")
            self.gen_node(test)
            ctx.push(")")
        ctx.indent()
        ctx.push("? ")
        self.gen_node(node.consequent)
        ctx.newline()
        ctx.push(": ")
        self.gen_node(node.alternate)
        ctx.deindent(True)

    def gen_cache_expression(self, node: A.CacheExpression) -> None:
        ctx = self.ctx
        slot = f"_cache[{node.index}]"
        ctx.push(f"{slot} || (")
        if node.is_vnode:
            ctx.indent()
            ctx.push(f"{ctx.helper(SET_BLOCK_TRACKING)}(-1),")
            ctx.newline()
        ctx.push(f"{slot} = ")
        self.gen_node(node.value)
        if node.is_vnode:
            ctx.push(",")
            ctx.newline()
            ctx.push(f"{ctx.helper(SET_BLOCK_TRACKING)}(1),")
            ctx.newline()
            ctx.push(slot)
            ctx.deindent()
        ctx.push(")")

    def gen_template_literal(self, node: A.TemplateLiteral) -> None:
        ctx = self.ctx
        ctx.push("`")
        for element in node.elements:
            if isinstance(element, str):
                ctx.push(_TEMPLATE_ESCAPE_RE.sub(r"\\\1", element))
            else:
                ctx.push("${")
                self.gen_node(element)
                ctx.push("}")
        ctx.push("`")

    def gen_assignment_expression(self, node: A.AssignmentExpression) -> None:
        self.gen_node(node.left)
        self.ctx.push(" = ")
        self.gen_node(node.right)

    # --- JavaScript statements ---

    def gen_block_statement(self, node: A.BlockStatement) -> None:
        ctx = self.ctx
        if not node.body:
            ctx.push("{}", node)
            return
        ctx.push("{")
        ctx.indent()
        self.gen_statements(node)
        ctx.deindent()
        ctx.push("}")

    def gen_if_statement(self, node: A.IfStatement) -> None:
        ctx = self.ctx
        ctx.push("if (")
        self.gen_node(node.test)
        ctx.push(") ")
        if not isinstance(node.consequent, A.BlockStatement):
            raise UnknownNodeTypeError(node.consequent)
        self.gen_block_statement(node.consequent)
        alternate = node.alternate
        if alternate is None:
            return
        ctx.push(" else ")
        if isinstance(alternate, A.IfStatement):
            self.gen_if_statement(alternate)
        elif isinstance(alternate, A.BlockStatement):
            self.gen_block_statement(alternate)
        else:
            raise UnknownNodeTypeError(alternate)

    def gen_return_statement(self, node: A.ReturnStatement) -> None:
        self.ctx.push("return ")
        if isinstance(node.returns, (list, tuple)):
            self.gen_node_list_as_array(node.returns)
        else:
            self.gen_node(node.returns)
