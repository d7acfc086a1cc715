# vcodegen/ast.py
"""
Codegen IR node definitions.

The transform stage hands the generator a finished tree of these nodes.  The
generator only reads them; every node carries the source span recorded by
the parser so diagnostics and source maps can point back at the template.

Module layout
-------------
§1  Source location
§2  Node type tags
§3  Template nodes (root, element, text, comment, expressions, if / for)
§4  JavaScript nodes (calls, objects, arrays, functions, statements, ...)
§5  Factories
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Sequence, Union

from vcodegen.runtime_helpers import RuntimeHelper

__all__ = [
    "Position",
    "SourceLocation",
    "LOC_STUB",
    "NodeTypes",
    "Node",
    "RootNode",
    "ImportItem",
    "ElementNode",
    "TextNode",
    "CommentNode",
    "SimpleExpressionNode",
    "InterpolationNode",
    "CompoundExpressionNode",
    "IfBranchNode",
    "IfNode",
    "ForNode",
    "CallExpression",
    "Property",
    "ObjectExpression",
    "ArrayExpression",
    "FunctionExpression",
    "SequenceExpression",
    "ConditionalExpression",
    "CacheExpression",
    "BlockStatement",
    "TemplateLiteral",
    "IfStatement",
    "AssignmentExpression",
    "ReturnStatement",
    "is_simple_identifier",
    "create_root",
    "create_simple_expression",
    "create_interpolation",
    "create_compound_expression",
    "create_object_property",
    "create_object_expression",
    "create_array_expression",
    "create_call_expression",
    "create_function_expression",
    "create_sequence_expression",
    "create_conditional_expression",
    "create_cache_expression",
    "create_block_statement",
    "create_template_literal",
    "create_if_statement",
    "create_assignment_expression",
    "create_return_statement",
]


# ════════════════════════════════════════════════════════════════════════
# §1  Source location
# ════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Position:
    offset: int = 0
    line: int = 1
    column: int = 1


@dataclass(frozen=True)
class SourceLocation:
    """Span of template source a node was produced from."""

    source: str = ""
    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)


#: Location for nodes synthesised by the compiler (no template position).
LOC_STUB = SourceLocation()


# ════════════════════════════════════════════════════════════════════════
# §2  Node type tags
# ════════════════════════════════════════════════════════════════════════


class NodeTypes(Enum):
    ROOT = "ROOT"
    ELEMENT = "ELEMENT"
    TEXT = "TEXT"
    COMMENT = "COMMENT"
    SIMPLE_EXPRESSION = "SIMPLE_EXPRESSION"
    INTERPOLATION = "INTERPOLATION"
    COMPOUND_EXPRESSION = "COMPOUND_EXPRESSION"
    IF = "IF"
    IF_BRANCH = "IF_BRANCH"
    FOR = "FOR"
    # codegen
    JS_CALL_EXPRESSION = "JS_CALL_EXPRESSION"
    JS_OBJECT_EXPRESSION = "JS_OBJECT_EXPRESSION"
    JS_PROPERTY = "JS_PROPERTY"
    JS_ARRAY_EXPRESSION = "JS_ARRAY_EXPRESSION"
    JS_FUNCTION_EXPRESSION = "JS_FUNCTION_EXPRESSION"
    JS_SEQUENCE_EXPRESSION = "JS_SEQUENCE_EXPRESSION"
    JS_CONDITIONAL_EXPRESSION = "JS_CONDITIONAL_EXPRESSION"
    JS_CACHE_EXPRESSION = "JS_CACHE_EXPRESSION"
    # ssr codegen
    JS_BLOCK_STATEMENT = "JS_BLOCK_STATEMENT"
    JS_TEMPLATE_LITERAL = "JS_TEMPLATE_LITERAL"
    JS_IF_STATEMENT = "JS_IF_STATEMENT"
    JS_ASSIGNMENT_EXPRESSION = "JS_ASSIGNMENT_EXPRESSION"
    JS_RETURN_STATEMENT = "JS_RETURN_STATEMENT"


class Node:
    """Base class for every IR node."""

    type: ClassVar[NodeTypes]
    loc: SourceLocation


# ════════════════════════════════════════════════════════════════════════
# §3  Template nodes
# ════════════════════════════════════════════════════════════════════════


@dataclass
class SimpleExpressionNode(Node):
    """A leaf expression.

    Static expressions are string constants (printed as a quoted literal);
    dynamic ones are JavaScript source text printed verbatim.  Identifier
    prefixing (``foo`` -> ``_ctx.foo``) has already happened upstream.
    """

    type: ClassVar[NodeTypes] = NodeTypes.SIMPLE_EXPRESSION
    content: str
    is_static: bool = False
    loc: SourceLocation = LOC_STUB


@dataclass
class CompoundExpressionNode(Node):
    """Concatenation of source fragments, helpers and nested nodes."""

    type: ClassVar[NodeTypes] = NodeTypes.COMPOUND_EXPRESSION
    children: List[Union[str, RuntimeHelper, Node]] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


ExpressionNode = Union[SimpleExpressionNode, CompoundExpressionNode]


@dataclass
class InterpolationNode(Node):
    type: ClassVar[NodeTypes] = NodeTypes.INTERPOLATION
    content: Node
    loc: SourceLocation = LOC_STUB


@dataclass
class TextNode(Node):
    type: ClassVar[NodeTypes] = NodeTypes.TEXT
    content: str
    loc: SourceLocation = LOC_STUB


@dataclass
class CommentNode(Node):
    type: ClassVar[NodeTypes] = NodeTypes.COMMENT
    content: str
    loc: SourceLocation = LOC_STUB


@dataclass
class ElementNode(Node):
    """An element whose printable shape lives entirely in ``codegen_node``."""

    type: ClassVar[NodeTypes] = NodeTypes.ELEMENT
    tag: str
    props: List[Node] = field(default_factory=list)
    children: List[Node] = field(default_factory=list)
    codegen_node: Optional[Node] = None
    loc: SourceLocation = LOC_STUB


@dataclass
class IfBranchNode(Node):
    type: ClassVar[NodeTypes] = NodeTypes.IF_BRANCH
    condition: Optional[ExpressionNode] = None
    children: List[Node] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


@dataclass
class IfNode(Node):
    type: ClassVar[NodeTypes] = NodeTypes.IF
    branches: List[IfBranchNode] = field(default_factory=list)
    codegen_node: Optional[Node] = None
    loc: SourceLocation = LOC_STUB


@dataclass
class ForNode(Node):
    type: ClassVar[NodeTypes] = NodeTypes.FOR
    source: Optional[ExpressionNode] = None
    value_alias: Optional[ExpressionNode] = None
    key_alias: Optional[ExpressionNode] = None
    object_index_alias: Optional[ExpressionNode] = None
    children: List[Node] = field(default_factory=list)
    codegen_node: Optional[Node] = None
    loc: SourceLocation = LOC_STUB


@dataclass
class ImportItem:
    """A module import collected by the transform stage (e.g. asset URLs)."""

    exp: Union[str, ExpressionNode]
    path: str


@dataclass
class RootNode(Node):
    """Top of the tree; exactly one per generated unit.

    ``helpers`` is the authoritative, ordered helper list computed by the
    transform stage.  ``cached`` and ``temps`` are slot counts.
    """

    type: ClassVar[NodeTypes] = NodeTypes.ROOT
    children: List[Node] = field(default_factory=list)
    helpers: List[RuntimeHelper] = field(default_factory=list)
    components: List[str] = field(default_factory=list)
    directives: List[str] = field(default_factory=list)
    imports: List[ImportItem] = field(default_factory=list)
    hoists: List[Node] = field(default_factory=list)
    cached: int = 0
    temps: int = 0
    codegen_node: Optional[Node] = None
    loc: SourceLocation = LOC_STUB


# ════════════════════════════════════════════════════════════════════════
# §4  JavaScript nodes
# ════════════════════════════════════════════════════════════════════════

#: Call arguments / list elements may be raw source text, nodes, or a nested
#: list of nodes (printed as an array literal).
CallArgument = Union[str, Node, Sequence[Node]]


@dataclass
class CallExpression(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_CALL_EXPRESSION
    callee: Union[str, RuntimeHelper]
    arguments: List[CallArgument] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


@dataclass
class Property(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_PROPERTY
    key: ExpressionNode
    value: Node
    loc: SourceLocation = LOC_STUB


@dataclass
class ObjectExpression(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_OBJECT_EXPRESSION
    properties: List[Property] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


@dataclass
class ArrayExpression(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_ARRAY_EXPRESSION
    elements: List[Union[str, Node]] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


@dataclass
class BlockStatement(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_BLOCK_STATEMENT
    body: List[Node] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


@dataclass
class FunctionExpression(Node):
    """Arrow function; ``newline`` puts the return on its own indented line."""

    type: ClassVar[NodeTypes] = NodeTypes.JS_FUNCTION_EXPRESSION
    params: Union[None, str, Node, List[Union[str, Node]]] = None
    returns: Union[None, Node, List[Node]] = None
    body: Optional[BlockStatement] = None
    newline: bool = False
    loc: SourceLocation = LOC_STUB


@dataclass
class SequenceExpression(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_SEQUENCE_EXPRESSION
    expressions: List[Node] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


@dataclass
class ConditionalExpression(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_CONDITIONAL_EXPRESSION
    test: Node
    consequent: Node
    alternate: Node
    loc: SourceLocation = LOC_STUB


@dataclass
class CacheExpression(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_CACHE_EXPRESSION
    index: int
    value: Node
    is_vnode: bool = False
    loc: SourceLocation = LOC_STUB


@dataclass
class TemplateLiteral(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_TEMPLATE_LITERAL
    elements: List[Union[str, Node]] = field(default_factory=list)
    loc: SourceLocation = LOC_STUB


@dataclass
class IfStatement(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_IF_STATEMENT
    test: Node
    consequent: BlockStatement
    alternate: Union[None, "IfStatement", BlockStatement] = None
    loc: SourceLocation = LOC_STUB


@dataclass
class AssignmentExpression(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_ASSIGNMENT_EXPRESSION
    left: Node
    right: Node
    loc: SourceLocation = LOC_STUB


@dataclass
class ReturnStatement(Node):
    type: ClassVar[NodeTypes] = NodeTypes.JS_RETURN_STATEMENT
    returns: Union[Node, List[Node]]
    loc: SourceLocation = LOC_STUB


_SIMPLE_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_simple_identifier(name: str) -> bool:
    """True when *name* can be written as a bare JavaScript identifier."""
    return bool(_SIMPLE_IDENTIFIER_RE.match(name))


# ════════════════════════════════════════════════════════════════════════
# §5  Factories
# ════════════════════════════════════════════════════════════════════════


def create_root(children: Optional[List[Node]] = None, **fields) -> RootNode:
    return RootNode(children=list(children or []), **fields)


def create_simple_expression(
    content: str,
    is_static: bool = False,
    loc: SourceLocation = LOC_STUB,
) -> SimpleExpressionNode:
    return SimpleExpressionNode(content=content, is_static=is_static, loc=loc)


def create_interpolation(
    content: Union[str, Node],
    loc: SourceLocation = LOC_STUB,
) -> InterpolationNode:
    if isinstance(content, str):
        content = create_simple_expression(content, False, loc)
    return InterpolationNode(content=content, loc=loc)


def create_compound_expression(
    children: Sequence[Union[str, RuntimeHelper, Node]],
    loc: SourceLocation = LOC_STUB,
) -> CompoundExpressionNode:
    return CompoundExpressionNode(children=list(children), loc=loc)


def create_object_property(
    key: Union[str, ExpressionNode],
    value: Node,
) -> Property:
    if isinstance(key, str):
        key = create_simple_expression(key, True)
    return Property(key=key, value=value, loc=LOC_STUB)


def create_object_expression(
    properties: Sequence[Property] = (),
    loc: SourceLocation = LOC_STUB,
) -> ObjectExpression:
    return ObjectExpression(properties=list(properties), loc=loc)


def create_array_expression(
    elements: Sequence[Union[str, Node]] = (),
    loc: SourceLocation = LOC_STUB,
) -> ArrayExpression:
    return ArrayExpression(elements=list(elements), loc=loc)


def create_call_expression(
    callee: Union[str, RuntimeHelper],
    args: Sequence[CallArgument] = (),
    loc: SourceLocation = LOC_STUB,
) -> CallExpression:
    return CallExpression(callee=callee, arguments=list(args), loc=loc)


def create_function_expression(
    params: Union[None, str, Node, List[Union[str, Node]]] = None,
    returns: Union[None, Node, List[Node]] = None,
    newline: bool = False,
    loc: SourceLocation = LOC_STUB,
) -> FunctionExpression:
    return FunctionExpression(
        params=params, returns=returns, newline=newline, loc=loc
    )


def create_sequence_expression(expressions: Sequence[Node]) -> SequenceExpression:
    return SequenceExpression(expressions=list(expressions), loc=LOC_STUB)


def create_conditional_expression(
    test: Node,
    consequent: Node,
    alternate: Node,
) -> ConditionalExpression:
    return ConditionalExpression(
        test=test, consequent=consequent, alternate=alternate, loc=LOC_STUB
    )


def create_cache_expression(
    index: int,
    value: Node,
    is_vnode: bool = False,
) -> CacheExpression:
    return CacheExpression(index=index, value=value, is_vnode=is_vnode, loc=LOC_STUB)


def create_block_statement(body: Sequence[Node]) -> BlockStatement:
    return BlockStatement(body=list(body), loc=LOC_STUB)


def create_template_literal(elements: Sequence[Union[str, Node]]) -> TemplateLiteral:
    return TemplateLiteral(elements=list(elements), loc=LOC_STUB)


def create_if_statement(
    test: Node,
    consequent: BlockStatement,
    alternate: Union[None, IfStatement, BlockStatement] = None,
) -> IfStatement:
    return IfStatement(
        test=test, consequent=consequent, alternate=alternate, loc=LOC_STUB
    )


def create_assignment_expression(left: Node, right: Node) -> AssignmentExpression:
    return AssignmentExpression(left=left, right=right, loc=LOC_STUB)


def create_return_statement(returns: Union[Node, List[Node]]) -> ReturnStatement:
    return ReturnStatement(returns=returns, loc=LOC_STUB)
