"""
Rewriting of detected equality checks.
"""

from .rewriter import DEFAULT_HELPER_NAME, apply_match, apply_matches, replacement_text

__all__ = ["DEFAULT_HELPER_NAME", "apply_match", "apply_matches", "replacement_text"]
