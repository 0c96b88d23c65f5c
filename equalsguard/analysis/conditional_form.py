"""
Ternary form of a null-safe equality check.

    A == null ? B == null : A.equals(B)     ~  equals(A, B)
    A == null ? B != null : !A.equals(B)    ~  !equals(A, B)
    A != null ? A.equals(B) : B == null     ~  equals(A, B)
    A != null ? !A.equals(B) : B != null    ~  !equals(A, B)
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import MatchForm, RewriteMatch
from .nodes import Conditional, strip_parentheses
from .patterns import MatchContext, match_equals_call, match_null_check

logger = logging.getLogger(__name__)


def match_conditional_form(ctx: MatchContext, expression: Conditional) -> Optional[RewriteMatch]:
    condition_check = match_null_check(ctx, expression.condition)
    if condition_check is None:
        return None

    if condition_check.equal:
        null_branch, non_null_branch = expression.then_expression, expression.else_expression
    else:
        null_branch, non_null_branch = expression.else_expression, expression.then_expression

    other_check = match_null_check(ctx, strip_parentheses(null_branch))
    if other_check is None:
        return None
    equals_call = match_equals_call(ctx, strip_parentheses(non_null_branch))
    if equals_call is None:
        return None
    if other_check.equal != equals_call.equal:
        return None

    names = (
        ctx.name_of(condition_check.compared),
        ctx.name_of(other_check.compared),
        ctx.name_of(equals_call.argument),
        ctx.name_of(equals_call.qualifier),
    )
    if None in names:
        return None
    condition_name, other_name, argument_name, qualifier_name = names

    if condition_name != qualifier_name or other_name != argument_name:
        logger.debug(
            f"Ternary checks ({condition_name}, {other_name}) do not match "
            f"equals operands ({qualifier_name}, {argument_name})"
        )
        return None

    return RewriteMatch(
        span=expression,
        left_operand=equals_call.qualifier,
        right_operand=equals_call.argument,
        negated=not equals_call.equal,
        form=MatchForm.CONDITIONAL,
    )
