"""
Main API interface for equalsguard

Provides a unified facade over parsing, detection and rewriting so hosts
can analyse expression text (or an already-built tree) with one object.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .analysis.detector import EqualsReplaceableDetector
from .analysis.error_handler import StandardErrorHandler, safe_run
from .analysis.models import AnalysisResult, AnalysisStage, EqualsFinding, RewriteMatch
from .analysis.nodes import ExpressionTree
from .analysis.resolution import ConventionResolver, ScopeResolver, SymbolResolver
from .config import EqualsGuardConfig, ResolutionConfig
from .parsing import ExpressionParser
from .refactoring.rewriter import apply_matches, replacement_text

logger = logging.getLogger(__name__)


def build_resolver(settings: ResolutionConfig) -> SymbolResolver:
    """Create the resolver selected by the resolution settings."""
    if settings.strategy == "scope":
        return ScopeResolver(
            variables=settings.variables,
            classes=settings.classes,
            packages=settings.packages,
        )
    return ConventionResolver(package_roots=settings.packages)


class EqualsGuard:
    """
    Main API class for equalsguard.

    Usage:
        guard = EqualsGuard()
        result = guard.analyze("a != null && a.equals(b)")
        fixed = guard.fix("a != null && a.equals(b)")
    """

    def __init__(
        self,
        config: Optional[EqualsGuardConfig] = None,
        resolver: Optional[SymbolResolver] = None,
    ):
        """
        Initialize with optional configuration and resolver.

        Args:
            config: Optional configuration object. If None, uses default configuration.
            resolver: Optional resolver overriding the configured resolution strategy.
        """
        self.config = config or EqualsGuardConfig.default()
        inspection = self.config.inspection_settings
        self.resolver = resolver or build_resolver(self.config.resolution_settings)
        self.detector = EqualsReplaceableDetector(
            resolver=self.resolver,
            require_explicit_null_guard=inspection.require_explicit_null_guard,
            applicability_gate=inspection.is_applicable,
            method_name=inspection.method_name,
        )
        self.parser = ExpressionParser()

        logger.info(
            f"equalsguard initialized (language level {inspection.language_level}, "
            f"null guard required: {inspection.require_explicit_null_guard})"
        )

    @property
    def helper_name(self) -> str:
        return self.config.inspection_settings.helper_name

    def parse(self, text: str) -> ExpressionTree:
        return self.parser.parse(text)

    def to_finding(
        self, tree: ExpressionTree, match: RewriteMatch, source_name: str = "<expr>"
    ) -> EqualsFinding:
        span = match.span.span
        return EqualsFinding(
            source_name=source_name,
            span_text=tree.text_of(match.span),
            left_text=tree.text_of(match.left_operand),
            right_text=tree.text_of(match.right_operand),
            replacement=replacement_text(tree, match, self.helper_name),
            negated=match.negated,
            form=match.form,
            start=span.start if span is not None else None,
            end=span.end if span is not None else None,
        )

    def analyze_tree(self, tree: ExpressionTree, source_name: str = "<expr>") -> List[EqualsFinding]:
        """Detect replaceable equality checks in an already-built tree."""
        return [self.to_finding(tree, m, source_name) for m in self.detector.scan(tree)]

    def analyze(self, text: str, source_name: str = "<expr>") -> AnalysisResult:
        """
        Parse and analyse one expression.

        Parse failures are reported in the result rather than raised.
        """
        errors = StandardErrorHandler()
        tree, error = safe_run(AnalysisStage.PARSE, source_name, self.parser.parse, text,
                               error_handler=errors)
        if tree is None:
            return AnalysisResult(success=False, source_name=source_name, errors=errors.get_errors())

        findings, error = safe_run(AnalysisStage.ANALYZE, source_name, self.analyze_tree, tree,
                                   source_name, error_handler=errors)
        return AnalysisResult(
            success=error is None,
            source_name=source_name,
            findings=findings or [],
            errors=errors.get_errors(),
            metadata={"expression": text},
        )

    def analyze_batch(
        self,
        texts: Sequence[str],
        source_names: Optional[Sequence[str]] = None,
        max_workers: Optional[int] = None,
    ) -> List[AnalysisResult]:
        """
        Analyse many expressions, optionally on a thread pool.

        Results keep the order of ``texts``; a failing input never stops the
        others.
        """
        names = list(source_names) if source_names is not None else [
            f"<expr {i + 1}>" for i in range(len(texts))
        ]
        if len(names) != len(texts):
            raise ValueError("source_names must match texts in length")

        workers = max_workers or self.config.output_settings.max_workers
        if workers <= 1 or len(texts) <= 1:
            return [self.analyze(text, name) for text, name in zip(texts, names)]

        logger.debug(f"Analysing {len(texts)} expressions with {workers} workers")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.analyze, texts, names))

    def fix(self, text: str) -> str:
        """Return ``text`` with every replaceable equality check rewritten."""
        tree = self.parser.parse(text)
        matches = self.detector.scan(tree)
        if not matches:
            return text
        return apply_matches(tree, matches, self.helper_name)
