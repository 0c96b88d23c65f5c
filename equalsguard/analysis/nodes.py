"""
Expression tree model for equality-idiom analysis.

Nodes are immutable, identity-compared views of a Java expression. The tree
wrapper indexes parents once so matchers can look upward (for the enclosing
binary or conditional expression) without mutating anything.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Type


class BinaryOperator(Enum):
    """Binary operators known to the tree."""

    LOGICAL_AND = "&&"
    LOGICAL_OR = "||"
    EQUALS = "=="
    NOT_EQUALS = "!="
    LESS = "<"
    GREATER = ">"
    LESS_EQUALS = "<="
    GREATER_EQUALS = ">="
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    REMAINDER = "%"


class PrefixOperator(Enum):
    """Prefix (unary) operators."""

    NOT = "!"
    NEGATE = "-"
    PLUS = "+"


class LiteralKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    CHAR = "char"


@dataclass(frozen=True)
class SourceSpan:
    """Half-open character range ``[start, end)`` in the parsed source."""

    start: int
    end: int


class ExpressionNode:
    """Base class for all expression variants."""

    span: Optional[SourceSpan]

    def children(self) -> Iterator["ExpressionNode"]:
        """Yield direct child expressions in source order."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, ExpressionNode):
                yield value
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, ExpressionNode):
                        yield item


@dataclass(frozen=True, eq=False)
class Literal(ExpressionNode):
    kind: LiteralKind
    value: str
    span: Optional[SourceSpan] = None

    @property
    def is_null(self) -> bool:
        return self.kind is LiteralKind.NULL


@dataclass(frozen=True, eq=False)
class Reference(ExpressionNode):
    """A (possibly qualified) name: ``field``, ``a.b``, ``foo().bar``."""

    name: str
    qualifier: Optional[ExpressionNode] = None
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class ThisExpression(ExpressionNode):
    """``this`` or ``Outer.this``."""

    qualifier: Optional[str] = None
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class SuperExpression(ExpressionNode):
    """``super`` or ``Outer.super``."""

    qualifier: Optional[str] = None
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class MethodCall(ExpressionNode):
    name: str
    qualifier: Optional[ExpressionNode] = None
    arguments: Tuple[ExpressionNode, ...] = ()
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class Binary(ExpressionNode):
    operator: BinaryOperator
    left: ExpressionNode
    right: ExpressionNode
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class Prefix(ExpressionNode):
    operator: PrefixOperator
    operand: ExpressionNode
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class Conditional(ExpressionNode):
    condition: ExpressionNode
    then_expression: ExpressionNode
    else_expression: ExpressionNode
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class Parenthesized(ExpressionNode):
    expression: ExpressionNode
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class Cast(ExpressionNode):
    """``(Type) expression``; never a stable value path."""

    type_name: str
    expression: ExpressionNode
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class ArrayAccess(ExpressionNode):
    array: ExpressionNode
    index: ExpressionNode
    span: Optional[SourceSpan] = None


@dataclass(frozen=True, eq=False)
class ObjectCreation(ExpressionNode):
    type_name: str
    arguments: Tuple[ExpressionNode, ...] = ()
    span: Optional[SourceSpan] = None


def strip_parentheses(node: Optional[ExpressionNode]) -> Optional[ExpressionNode]:
    """Return the innermost expression inside any number of parentheses."""
    while isinstance(node, Parenthesized):
        node = node.expression
    return node


def render(
    node: ExpressionNode,
    substitutions: Optional[Mapping[ExpressionNode, str]] = None,
) -> str:
    """
    Render a node as canonical Java text.

    Args:
        node: Node to render
        substitutions: Optional replacement text for specific nodes (by identity)
    """
    if substitutions and node in substitutions:
        return substitutions[node]

    def sub(child: ExpressionNode) -> str:
        return render(child, substitutions)

    def args(items: Tuple[ExpressionNode, ...]) -> str:
        return ", ".join(sub(item) for item in items)

    if isinstance(node, Literal):
        return node.value
    if isinstance(node, Reference):
        return node.name if node.qualifier is None else f"{sub(node.qualifier)}.{node.name}"
    if isinstance(node, ThisExpression):
        return "this" if node.qualifier is None else f"{node.qualifier}.this"
    if isinstance(node, SuperExpression):
        return "super" if node.qualifier is None else f"{node.qualifier}.super"
    if isinstance(node, MethodCall):
        call = f"{node.name}({args(node.arguments)})"
        return call if node.qualifier is None else f"{sub(node.qualifier)}.{call}"
    if isinstance(node, Binary):
        return f"{sub(node.left)} {node.operator.value} {sub(node.right)}"
    if isinstance(node, Prefix):
        return f"{node.operator.value}{sub(node.operand)}"
    if isinstance(node, Conditional):
        return (
            f"{sub(node.condition)} ? {sub(node.then_expression)} : {sub(node.else_expression)}"
        )
    if isinstance(node, Parenthesized):
        return f"({sub(node.expression)})"
    if isinstance(node, Cast):
        return f"({node.type_name}) {sub(node.expression)}"
    if isinstance(node, ArrayAccess):
        return f"{sub(node.array)}[{sub(node.index)}]"
    if isinstance(node, ObjectCreation):
        return f"new {node.type_name}({args(node.arguments)})"
    raise TypeError(f"Unknown expression node: {type(node).__name__}")


class ExpressionTree:
    """
    Read-only view of a parsed expression with a parent index.

    The parent index is built once; nodes are hashed by identity so two
    textually identical sub-expressions remain distinct positions.
    """

    def __init__(self, root: ExpressionNode, source: Optional[str] = None):
        self.root = root
        self.source = source
        self._parents: Dict[ExpressionNode, ExpressionNode] = {}
        self._index(root)

    def _index(self, root: ExpressionNode) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            for child in node.children():
                self._parents[child] = node
                stack.append(child)

    def parent(self, node: ExpressionNode) -> Optional[ExpressionNode]:
        return self._parents.get(node)

    def walk(self) -> Iterator[ExpressionNode]:
        """Pre-order traversal from the root."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(list(node.children())))

    def method_calls(self) -> List[MethodCall]:
        return [node for node in self.walk() if isinstance(node, MethodCall)]

    def is_ancestor(
        self, ancestor: ExpressionNode, node: ExpressionNode, strict: bool = True
    ) -> bool:
        current = node if not strict else self.parent(node)
        while current is not None:
            if current is ancestor:
                return True
            current = self.parent(current)
        return False

    def text_of(self, node: ExpressionNode) -> str:
        """Verbatim source text of ``node`` when available, canonical rendering otherwise."""
        if self.source is not None and node.span is not None:
            return self.source[node.span.start : node.span.end]
        return render(node)

    def __contains__(self, node: ExpressionNode) -> bool:
        return node is self.root or node in self._parents


def skip_parents(
    tree: ExpressionTree,
    node: ExpressionNode,
    *kinds: Type[ExpressionNode],
) -> Optional[ExpressionNode]:
    """Return the first ancestor of ``node`` that is not an instance of ``kinds``."""
    parent = tree.parent(node)
    while parent is not None and isinstance(parent, kinds):
        parent = tree.parent(parent)
    return parent
