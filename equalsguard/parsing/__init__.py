"""
Java expression front end.
"""

from .parser import ExpressionParser, ExpressionSyntaxError, parse_expression

__all__ = ["ExpressionParser", "ExpressionSyntaxError", "parse_expression"]
