"""
Canonical names for stable value paths.

Two expressions are treated as the same logical value when their qualified
names are textually identical (``this.a`` and ``this.a``, ``Outer.this.b``).
This is purely syntactic plus symbol identity; no alias analysis is done.
"""

from __future__ import annotations

from typing import Optional

from .nodes import ExpressionNode, Reference, SuperExpression, ThisExpression, strip_parentheses
from .resolution import SymbolResolver


def qualified_name(resolver: SymbolResolver, expression: Optional[ExpressionNode]) -> Optional[str]:
    """
    Convert a variable chain like ``a.b.c`` into its dotted name.

    ``this`` and ``super`` (optionally class-qualified) are allowed anywhere a
    qualifier is. Every reference in the chain must resolve to a variable or
    a class.

    Returns:
        The dotted name with parentheses stripped, or None if ``expression``
        is not a variable chain
    """
    expression = strip_parentheses(expression)
    if isinstance(expression, Reference):
        if not expression.name:
            return None
        if not resolver.resolve(expression).is_nameable:
            return None
        qualifier = strip_parentheses(expression.qualifier)
        if qualifier is None:
            return expression.name
        qualifier_name = qualified_name(resolver, qualifier)
        return f"{qualifier_name}.{expression.name}" if qualifier_name is not None else None
    if isinstance(expression, ThisExpression):
        return "this" if expression.qualifier is None else f"{expression.qualifier}.this"
    if isinstance(expression, SuperExpression):
        return "super" if expression.qualifier is None else f"{expression.qualifier}.super"
    return None


def is_self_reference(expression: Optional[ExpressionNode]) -> bool:
    """True for ``this``/``super`` (qualified or not), looking through parentheses."""
    return isinstance(strip_parentheses(expression), (ThisExpression, SuperExpression))
