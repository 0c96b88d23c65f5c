"""
Analysis core: expression tree model, symbol resolution and the matchers
that recognise null-safe equality idioms.
"""

from .nodes import (
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
    render,
    skip_parents,
    strip_parentheses,
)
from .resolution import ConventionResolver, ScopeResolver, SymbolKind, SymbolResolver
from .models import (
    AnalysisError,
    AnalysisResult,
    AnalysisStage,
    EqualsCallMatch,
    EqualsFinding,
    MatchForm,
    NullCheckMatch,
    RewriteMatch,
)
from .naming import qualified_name
from .patterns import MatchContext, match_equals_call, match_null_check, unwrap_negation
from .binary_form import match_binary_form
from .conditional_form import match_conditional_form
from .detector import EqualsReplaceableDetector

__all__ = [
    "ArrayAccess",
    "Binary",
    "BinaryOperator",
    "Cast",
    "Conditional",
    "ExpressionNode",
    "ExpressionTree",
    "Literal",
    "LiteralKind",
    "MethodCall",
    "ObjectCreation",
    "Parenthesized",
    "Prefix",
    "PrefixOperator",
    "Reference",
    "SourceSpan",
    "SuperExpression",
    "ThisExpression",
    "render",
    "skip_parents",
    "strip_parentheses",
    "ConventionResolver",
    "ScopeResolver",
    "SymbolKind",
    "SymbolResolver",
    "AnalysisError",
    "AnalysisResult",
    "AnalysisStage",
    "EqualsCallMatch",
    "EqualsFinding",
    "MatchForm",
    "NullCheckMatch",
    "RewriteMatch",
    "qualified_name",
    "MatchContext",
    "match_equals_call",
    "match_null_check",
    "unwrap_negation",
    "match_binary_form",
    "match_conditional_form",
    "EqualsReplaceableDetector",
]
