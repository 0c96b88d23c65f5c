"""
equalsguard - Null-safe equality inspection for Java expressions

Detects hand-written null-safe equality idioms (guarded ``equals`` calls,
ternaries, bare ``equals`` calls) and proposes replacing them with a single
``java.util.Objects.equals`` call.
"""

__version__ = "0.1.0"
__author__ = "equalsguard Team"


def __getattr__(name):
    """Lazy loading of main API classes to prevent heavy imports at module level."""
    if name in {"EqualsGuard", "AnalysisResult", "EqualsFinding"}:
        from .api import EqualsGuard
        from .analysis.models import AnalysisResult, EqualsFinding
        return {
            "EqualsGuard": EqualsGuard,
            "AnalysisResult": AnalysisResult,
            "EqualsFinding": EqualsFinding,
        }[name]

    if name in {"EqualsGuardConfig", "ConfigurationError"}:
        from .config import EqualsGuardConfig, ConfigurationError
        return {
            "EqualsGuardConfig": EqualsGuardConfig,
            "ConfigurationError": ConfigurationError,
        }[name]

    if name in {"EqualsReplaceableDetector", "RewriteMatch"}:
        from .analysis import EqualsReplaceableDetector, RewriteMatch
        return {
            "EqualsReplaceableDetector": EqualsReplaceableDetector,
            "RewriteMatch": RewriteMatch,
        }[name]

    if name in {"ExpressionParser", "ExpressionSyntaxError"}:
        from .parsing import ExpressionParser, ExpressionSyntaxError
        return {
            "ExpressionParser": ExpressionParser,
            "ExpressionSyntaxError": ExpressionSyntaxError,
        }[name]

    raise AttributeError(f"module 'equalsguard' has no attribute '{name}'")


__all__ = [
    "__version__",
    # Main API
    "EqualsGuard",
    "AnalysisResult",
    "EqualsFinding",
    "EqualsGuardConfig",
    "ConfigurationError",
    # Core components (for advanced usage)
    "EqualsReplaceableDetector",
    "RewriteMatch",
    "ExpressionParser",
    "ExpressionSyntaxError",
]
