"""
Short-circuit forms of a null-safe equality check.

Matches, at the binary expression enclosing an ``equals`` call::

    x != null && x.equals(y)        ~  equals(x, y)
    x == null || !x.equals(y)       ~  !equals(x, y)

and widens the replaced span over a preceding identity comparison::

    x == y || (x != null && x.equals(y))    ~  equals(x, y)
    x != y && (x == null || !x.equals(y))   ~  !equals(x, y)
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import MatchForm, RewriteMatch
from .nodes import Binary, BinaryOperator, ExpressionNode, Parenthesized, skip_parents, strip_parentheses
from .patterns import MatchContext, match_equals_call, match_null_check
from .predicates import is_logical_not

logger = logging.getLogger(__name__)


def is_guard_shape(expression: Binary) -> bool:
    """True when ``expression`` has the outer shape of a guarded equals call."""
    if expression.operator is BinaryOperator.LOGICAL_AND:
        return True
    if expression.operator is BinaryOperator.LOGICAL_OR:
        return is_logical_not(strip_parentheses(expression.right))
    return False


def match_binary_form(ctx: MatchContext, expression: Binary) -> Optional[RewriteMatch]:
    """Match ``expression`` against the two short-circuit forms."""
    right = strip_parentheses(expression.right)
    if expression.operator is BinaryOperator.LOGICAL_AND:
        return _match_guarded_call(ctx, expression, right, equal=True)
    if expression.operator is BinaryOperator.LOGICAL_OR and is_logical_not(right):
        return _match_guarded_call(ctx, expression, strip_parentheses(right.operand), equal=False)
    return None


def _match_guarded_call(
    ctx: MatchContext,
    expression: Binary,
    call: Optional[ExpressionNode],
    equal: bool,
) -> Optional[RewriteMatch]:
    equals_call = match_equals_call(ctx, call)
    if equals_call is None or not equals_call.equal:
        return None

    # && needs "x != null" on the left, || needs "x == null"
    null_check = match_null_check(ctx, expression.left)
    if null_check is None or null_check.equal == equal:
        return None

    null_checked_name = ctx.name_of(null_check.compared)
    if null_checked_name is None:
        return None
    qualifier_name = ctx.name_of(equals_call.qualifier)
    if qualifier_name != null_checked_name:
        logger.debug(
            f"Null check on '{null_checked_name}' does not guard qualifier '{qualifier_name}'"
        )
        return None

    argument_name = ctx.name_of(equals_call.argument)
    span: ExpressionNode = expression
    if argument_name is not None:
        span = widen_to_preceding_equality(ctx, expression, equal, qualifier_name, argument_name)

    return RewriteMatch(
        span=span,
        left_operand=equals_call.qualifier,
        right_operand=equals_call.argument,
        negated=not equal,
        form=MatchForm.BINARY,
    )


def widen_to_preceding_equality(
    ctx: MatchContext,
    expression: Binary,
    equal: bool,
    name1: str,
    name2: str,
) -> ExpressionNode:
    """
    Extend the span over ``x == y ||`` (or ``x != y &&``) in front of ``expression``.

    Returns:
        The enclosing binary expression when it matches, ``expression`` otherwise
    """
    parent = skip_parents(ctx.tree, expression, Parenthesized)
    if not isinstance(parent, Binary):
        return expression
    expected = BinaryOperator.LOGICAL_OR if equal else BinaryOperator.LOGICAL_AND
    if parent.operator is not expected:
        return expression
    if not ctx.tree.is_ancestor(parent.right, expression, strict=False):
        return expression
    if is_identity_comparison(ctx, parent.left, equal, name1, name2):
        return parent
    return expression


def is_identity_comparison(
    ctx: MatchContext,
    expression: ExpressionNode,
    equal: bool,
    name1: str,
    name2: str,
) -> bool:
    """True for ``name1 == name2`` (``!=`` when not ``equal``) in either order."""
    expression = strip_parentheses(expression)
    if not isinstance(expression, Binary):
        return False
    expected = BinaryOperator.EQUALS if equal else BinaryOperator.NOT_EQUALS
    if expression.operator is not expected:
        return False
    left_name = ctx.name_of(expression.left)
    right_name = ctx.name_of(expression.right)
    if left_name is None or right_name is None:
        return False
    return (left_name == name1 and right_name == name2) or (
        left_name == name2 and right_name == name1
    )
