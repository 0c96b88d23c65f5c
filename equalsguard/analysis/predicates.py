"""
Small structural predicates shared by the matchers.
"""

from __future__ import annotations

from typing import Callable, Optional

from .nodes import Binary, BinaryOperator, ExpressionNode, Literal, Prefix, PrefixOperator, strip_parentheses

NullComparison = Callable[[Optional[ExpressionNode], bool], Optional[ExpressionNode]]


def is_null_literal(node: Optional[ExpressionNode]) -> bool:
    return isinstance(node, Literal) and node.is_null


def is_null_comparison(
    expression: Optional[ExpressionNode], expect_equals: bool
) -> Optional[ExpressionNode]:
    """
    Recognize ``x == null`` / ``x != null`` in either operand order.

    Args:
        expression: Candidate comparison (parentheses are looked through)
        expect_equals: True to accept ``==``, False to accept ``!=``

    Returns:
        The operand compared against null, or None
    """
    expression = strip_parentheses(expression)
    if not isinstance(expression, Binary):
        return None
    expected = BinaryOperator.EQUALS if expect_equals else BinaryOperator.NOT_EQUALS
    if expression.operator is not expected:
        return None
    left = strip_parentheses(expression.left)
    right = strip_parentheses(expression.right)
    if is_null_literal(right):
        return left
    if is_null_literal(left):
        return right
    return None


def is_logical_not(node: Optional[ExpressionNode]) -> bool:
    return isinstance(node, Prefix) and node.operator is PrefixOperator.NOT
