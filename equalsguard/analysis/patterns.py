"""
Building-block matchers: negation, null checks and equals calls.

Each matcher is a pure function of a node (plus the collaborators held by
``MatchContext``) returning a small immutable match or None.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

from .models import EqualsCallMatch, NullCheckMatch
from .naming import is_self_reference, qualified_name
from .nodes import ExpressionNode, ExpressionTree, MethodCall, strip_parentheses
from .predicates import NullComparison, is_logical_not, is_null_comparison
from .resolution import SymbolResolver

EQUALS_METHOD = "equals"


@dataclass(frozen=True)
class MatchContext:
    """Read-only collaborators shared by all matchers for one tree."""

    tree: ExpressionTree
    resolver: SymbolResolver
    null_comparison: NullComparison = is_null_comparison
    method_name: str = EQUALS_METHOD

    def name_of(self, expression: Optional[ExpressionNode]) -> Optional[str]:
        return qualified_name(self.resolver, expression)


class Unwrapped(NamedTuple):
    expression: ExpressionNode
    positive: bool


def unwrap_negation(expression: ExpressionNode) -> Unwrapped:
    """
    Strip parentheses and at most one leading ``!``.

    ``!(x)`` gives ``(x, False)``; ``!!x`` gives ``(!x, False)``.
    """
    expression = strip_parentheses(expression)
    if is_logical_not(expression):
        return Unwrapped(strip_parentheses(expression.operand), False)
    return Unwrapped(expression, True)


def match_null_check(ctx: MatchContext, expression: Optional[ExpressionNode]) -> Optional[NullCheckMatch]:
    """
    Match ``x == null``, ``x != null`` and their ``!``-negations.

    ``equal`` on the result means "x is null": ``x == null`` and
    ``!(x != null)`` are equal, ``x != null`` and ``!(x == null)`` are not.
    """
    if expression is None:
        return None
    inner, positive = unwrap_negation(expression)
    compared = ctx.null_comparison(inner, True)
    if compared is not None:
        return NullCheckMatch(compared, positive)
    compared = ctx.null_comparison(inner, False)
    if compared is not None:
        return NullCheckMatch(compared, not positive)
    return None


def call_qualifier(call: MethodCall) -> Optional[ExpressionNode]:
    return strip_parentheses(call.qualifier)


def call_argument(call: MethodCall) -> Optional[ExpressionNode]:
    """The sole argument of ``call`` (parentheses stripped), or None."""
    if len(call.arguments) != 1:
        return None
    return strip_parentheses(call.arguments[0])


def match_equals_call(ctx: MatchContext, expression: Optional[ExpressionNode]) -> Optional[EqualsCallMatch]:
    """
    Match ``q.equals(arg)`` and ``!q.equals(arg)``.

    The qualifier must be explicit and must not be ``this``/``super``;
    exactly one argument is required.
    """
    if expression is None:
        return None
    inner, positive = unwrap_negation(expression)
    if not isinstance(inner, MethodCall) or inner.name != ctx.method_name:
        return None
    argument = call_argument(inner)
    qualifier = call_qualifier(inner)
    if argument is None or qualifier is None or is_self_reference(qualifier):
        return None
    return EqualsCallMatch(qualifier=qualifier, argument=argument, equal=positive)
