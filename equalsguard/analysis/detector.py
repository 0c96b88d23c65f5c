"""
Detection of equality checks replaceable by a null-safe helper call.

The detector is driven per ``equals`` call-site. It first looks at the
syntactic context of the call (through enclosing parentheses and prefix
operators): a short-circuit ``&&``/``||`` guard or a ternary. When neither
yields a match, it optionally reports the bare call itself, since
``a.equals(b)`` throws where ``Objects.equals(a, b)`` does not.

No exceptions are raised for unrecognised shapes; "no match" is the normal
outcome for most call-sites.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .binary_form import is_guard_shape, match_binary_form
from .conditional_form import match_conditional_form
from .models import MatchForm, RewriteMatch
from .naming import is_self_reference
from .nodes import (
    Binary,
    Conditional,
    ExpressionNode,
    ExpressionTree,
    MethodCall,
    Parenthesized,
    Prefix,
    skip_parents,
)
from .patterns import EQUALS_METHOD, MatchContext, call_argument, call_qualifier
from .predicates import NullComparison, is_null_comparison
from .resolution import SymbolResolver

logger = logging.getLogger(__name__)


def _always_applicable() -> bool:
    return True


class EqualsReplaceableDetector:
    """
    Match orchestrator for a single inspection configuration.

    Instances hold only read-only collaborators and can be shared between
    threads analysing different trees.
    """

    def __init__(
        self,
        resolver: SymbolResolver,
        require_explicit_null_guard: bool = False,
        applicability_gate: Optional[Callable[[], bool]] = None,
        null_comparison: NullComparison = is_null_comparison,
        method_name: str = EQUALS_METHOD,
    ):
        self.resolver = resolver
        self.require_explicit_null_guard = require_explicit_null_guard
        self.applicability_gate = applicability_gate or _always_applicable
        self.null_comparison = null_comparison
        self.method_name = method_name

    def is_applicable(self) -> bool:
        return bool(self.applicability_gate())

    def context_for(self, tree: ExpressionTree) -> MatchContext:
        return MatchContext(
            tree=tree,
            resolver=self.resolver,
            null_comparison=self.null_comparison,
            method_name=self.method_name,
        )

    def analyze_call(self, tree: ExpressionTree, call: ExpressionNode) -> Optional[RewriteMatch]:
        """
        Analyse one call-site.

        Returns:
            The rewrite match for ``call``, or None when nothing applies
        """
        if not self.is_applicable():
            return None
        return self._analyze_call(self.context_for(tree), call)

    def scan(self, tree: ExpressionTree) -> List[RewriteMatch]:
        """Analyse every call-site of ``tree`` in pre-order."""
        if not self.is_applicable():
            logger.debug("Detector not applicable, skipping scan")
            return []
        ctx = self.context_for(tree)
        matches: List[RewriteMatch] = []
        reported = set()
        for call in tree.method_calls():
            match = self._analyze_call(ctx, call)
            if match is None or match.span in reported:
                continue
            reported.add(match.span)
            matches.append(match)
        return matches

    def _analyze_call(self, ctx: MatchContext, call: ExpressionNode) -> Optional[RewriteMatch]:
        if not isinstance(call, MethodCall) or call.name != self.method_name:
            return None
        qualifier = call_qualifier(call)
        if is_self_reference(qualifier):
            return None

        context = skip_parents(ctx.tree, call, Parenthesized, Prefix)
        if isinstance(context, Binary):
            match = match_binary_form(ctx, context)
            if match is not None:
                logger.debug(f"Binary form matched at '{ctx.tree.text_of(match.span)}'")
                return match
            if not is_guard_shape(context):
                # the call is an operand of some other boolean/comparison expression
                return None
        elif isinstance(context, Conditional):
            match = match_conditional_form(ctx, context)
            if match is not None:
                logger.debug(f"Conditional form matched at '{ctx.tree.text_of(match.span)}'")
                return match

        if self.require_explicit_null_guard:
            return None
        argument = call_argument(call)
        if qualifier is None or argument is None:
            return None
        return RewriteMatch(
            span=call,
            left_operand=qualifier,
            right_operand=argument,
            negated=False,
            form=MatchForm.DIRECT_CALL,
        )
