"""
Java expression parser using Lark.

Produces an ``ExpressionTree`` whose nodes keep parentheses and carry source
spans, so replacement operands can be taken verbatim from the input text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from equalsguard.analysis.nodes import (
    ArrayAccess,
    Binary,
    BinaryOperator,
    Cast,
    Conditional,
    ExpressionNode,
    ExpressionTree,
    Literal,
    LiteralKind,
    MethodCall,
    ObjectCreation,
    Parenthesized,
    Prefix,
    PrefixOperator,
    Reference,
    SourceSpan,
    SuperExpression,
    ThisExpression,
)
from equalsguard.analysis.resolution import dotted_name

logger = logging.getLogger(__name__)

GRAMMAR_FILE = Path(__file__).parent / "java_expression.lark"


class ExpressionSyntaxError(Exception):
    """Raised when an expression cannot be parsed."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass(frozen=True)
class _Arguments:
    items: Tuple[ExpressionNode, ...]
    start: int
    end: int


Item = Union[ExpressionNode, Token, _Arguments]


def _start(item: Item) -> int:
    if isinstance(item, Token):
        return item.start_pos
    if isinstance(item, _Arguments):
        return item.start
    return item.span.start


def _end(item: Item) -> int:
    if isinstance(item, Token):
        return item.end_pos
    if isinstance(item, _Arguments):
        return item.end
    return item.span.end


def _span(first: Item, last: Item) -> SourceSpan:
    return SourceSpan(_start(first), _end(last))


def _operands(children: List[Item]) -> List[ExpressionNode]:
    return [c for c in children if isinstance(c, ExpressionNode)]


class ExpressionTransformer(Transformer):
    """Transforms the Lark parse tree into expression nodes."""

    def _binary(self, operator: BinaryOperator, children: List[Item]) -> Binary:
        operands = _operands(children)
        left, right = operands[0], operands[-1]
        return Binary(operator, left, right, span=_span(left, right))

    def or_op(self, children):
        return self._binary(BinaryOperator.LOGICAL_OR, children)

    def and_op(self, children):
        return self._binary(BinaryOperator.LOGICAL_AND, children)

    def eq_op(self, children):
        return self._binary(BinaryOperator.EQUALS, children)

    def ne_op(self, children):
        return self._binary(BinaryOperator.NOT_EQUALS, children)

    def lt_op(self, children):
        return self._binary(BinaryOperator.LESS, children)

    def gt_op(self, children):
        return self._binary(BinaryOperator.GREATER, children)

    def le_op(self, children):
        return self._binary(BinaryOperator.LESS_EQUALS, children)

    def ge_op(self, children):
        return self._binary(BinaryOperator.GREATER_EQUALS, children)

    def add_op(self, children):
        return self._binary(BinaryOperator.PLUS, children)

    def sub_op(self, children):
        return self._binary(BinaryOperator.MINUS, children)

    def mul_op(self, children):
        return self._binary(BinaryOperator.TIMES, children)

    def div_op(self, children):
        return self._binary(BinaryOperator.DIVIDE, children)

    def mod_op(self, children):
        return self._binary(BinaryOperator.REMAINDER, children)

    def conditional(self, children):
        condition, then_expression, else_expression = _operands(children)
        return Conditional(
            condition,
            then_expression,
            else_expression,
            span=_span(condition, else_expression),
        )

    def _prefix(self, operator: PrefixOperator, children: List[Item]) -> Prefix:
        token, operand = children[0], children[-1]
        return Prefix(operator, operand, span=_span(token, operand))

    def not_op(self, children):
        return self._prefix(PrefixOperator.NOT, children)

    def neg_op(self, children):
        return self._prefix(PrefixOperator.NEGATE, children)

    def pos_op(self, children):
        return self._prefix(PrefixOperator.PLUS, children)

    def cast(self, children):
        open_paren, type_expression, _, operand = children
        type_name = dotted_name(type_expression)
        if type_name is None:
            raise ExpressionSyntaxError(
                "cast type must be a class name",
                line=open_paren.line,
                column=open_paren.column,
            )
        return Cast(type_name, operand, span=_span(open_paren, operand))

    def field_access(self, children):
        qualifier, name = children
        return Reference(str(name), qualifier, span=_span(qualifier, name))

    def method_call(self, children):
        qualifier, name, arguments = children
        return MethodCall(str(name), qualifier, arguments.items, span=_span(qualifier, arguments))

    def local_call(self, children):
        name, arguments = children
        return MethodCall(str(name), None, arguments.items, span=_span(name, arguments))

    def _qualifier_name(self, qualifier: ExpressionNode, keyword: Token) -> str:
        name = dotted_name(qualifier)
        if name is None:
            raise ExpressionSyntaxError(
                f"'{keyword}' can only be qualified by a class name",
                line=keyword.line,
                column=keyword.column,
            )
        return name

    def qualified_this(self, children):
        qualifier, keyword = children
        return ThisExpression(self._qualifier_name(qualifier, keyword), span=_span(qualifier, keyword))

    def qualified_super(self, children):
        qualifier, keyword = children
        return SuperExpression(self._qualifier_name(qualifier, keyword), span=_span(qualifier, keyword))

    def array_access(self, children):
        array, index = _operands(children)
        return ArrayAccess(array, index, span=_span(array, children[-1]))

    def _literal(self, kind: LiteralKind, children: List[Token]) -> Literal:
        (token,) = children
        return Literal(kind, str(token), span=_span(token, token))

    def null_literal(self, children):
        return self._literal(LiteralKind.NULL, children)

    def boolean_literal(self, children):
        return self._literal(LiteralKind.BOOLEAN, children)

    def number_literal(self, children):
        return self._literal(LiteralKind.NUMBER, children)

    def string_literal(self, children):
        return self._literal(LiteralKind.STRING, children)

    def char_literal(self, children):
        return self._literal(LiteralKind.CHAR, children)

    def this_expr(self, children):
        (token,) = children
        return ThisExpression(span=_span(token, token))

    def super_expr(self, children):
        (token,) = children
        return SuperExpression(span=_span(token, token))

    def name(self, children):
        (token,) = children
        return Reference(str(token), span=_span(token, token))

    def paren(self, children):
        open_paren, expression, close_paren = children
        return Parenthesized(expression, span=_span(open_paren, close_paren))

    def new_object(self, children):
        keyword, type_name, arguments = children
        return ObjectCreation(type_name, arguments.items, span=_span(keyword, arguments))

    def qualified_type(self, children):
        return ".".join(str(token) for token in children)

    def arguments(self, children):
        open_paren, close_paren = children[0], children[-1]
        return _Arguments(
            items=tuple(_operands(children)),
            start=open_paren.start_pos,
            end=close_paren.end_pos,
        )


class ExpressionParser:
    """
    Parser for the Java expression subset understood by the inspection.

    Usage:
        tree = ExpressionParser().parse("a != null && a.equals(b)")
    """

    _lark: Optional[Lark] = None

    def __init__(self):
        if ExpressionParser._lark is None:
            ExpressionParser._lark = Lark(
                GRAMMAR_FILE.read_text(encoding="utf-8"),
                start="start",
                parser="lalr",
            )
            logger.debug(f"Loaded expression grammar from {GRAMMAR_FILE}")
        self._parser = ExpressionParser._lark
        self._transformer = ExpressionTransformer()

    def parse(self, source: str) -> ExpressionTree:
        """Parse ``source`` into an expression tree."""
        try:
            parse_tree = self._parser.parse(source)
        except UnexpectedInput as e:
            line = getattr(e, "line", None)
            column = getattr(e, "column", None)
            raise ExpressionSyntaxError(
                f"Invalid expression at line {line}, column {column}: {source.strip()!r}",
                line=line if isinstance(line, int) and line > 0 else None,
                column=column if isinstance(column, int) and column > 0 else None,
            ) from e
        try:
            root = self._transformer.transform(parse_tree)
        except VisitError as e:
            if isinstance(e.orig_exc, ExpressionSyntaxError):
                raise e.orig_exc from e
            raise
        return ExpressionTree(root, source=source)


def parse_expression(source: str) -> ExpressionTree:
    """Convenience wrapper around ``ExpressionParser().parse``."""
    return ExpressionParser().parse(source)
