"""
refactoring/rewriter.py

Builds replacement text for rewrite matches and splices it into the source.

Notes:
- Operand text is taken verbatim from the source (qualifier first, argument
  second), so formatting inside the operands is preserved.
- When several matches overlap, the outermost span wins.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from equalsguard.analysis.models import RewriteMatch
from equalsguard.analysis.nodes import ExpressionNode, ExpressionTree, render

logger = logging.getLogger(__name__)

DEFAULT_HELPER_NAME = "java.util.Objects.equals"


def replacement_text(
    tree: ExpressionTree,
    match: RewriteMatch,
    helper_name: str = DEFAULT_HELPER_NAME,
) -> str:
    """Render ``[!]helper(left, right)`` for ``match``."""
    left = tree.text_of(match.left_operand)
    right = tree.text_of(match.right_operand)
    call = f"{helper_name}({left}, {right})"
    return f"!{call}" if match.negated else call


def _outermost(tree: ExpressionTree, matches: Sequence[RewriteMatch]) -> List[RewriteMatch]:
    selected: List[RewriteMatch] = []
    for match in matches:
        if any(
            other is not match and tree.is_ancestor(other.span, match.span)
            for other in matches
        ):
            logger.debug(f"Skipping nested match at '{tree.text_of(match.span)}'")
            continue
        selected.append(match)
    return selected


def apply_matches(
    tree: ExpressionTree,
    matches: Sequence[RewriteMatch],
    helper_name: str = DEFAULT_HELPER_NAME,
) -> str:
    """
    Apply all non-overlapping matches to the expression text.

    Args:
        tree: Tree the matches were computed on
        matches: Matches to apply
        helper_name: Fully qualified helper to call

    Returns:
        The rewritten expression text
    """
    selected = _outermost(tree, matches)
    replacements: Dict[ExpressionNode, str] = {
        match.span: replacement_text(tree, match, helper_name) for match in selected
    }

    if tree.source is None or any(match.span.span is None for match in selected):
        return render(tree.root, replacements)

    text = tree.source
    for match in sorted(selected, key=lambda m: m.span.span.start, reverse=True):
        span = match.span.span
        text = text[: span.start] + replacements[match.span] + text[span.end :]
    return text


def apply_match(
    tree: ExpressionTree,
    match: RewriteMatch,
    helper_name: str = DEFAULT_HELPER_NAME,
) -> str:
    """Apply a single match; see ``apply_matches``."""
    return apply_matches(tree, [match], helper_name)
