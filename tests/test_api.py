"""
Tests for the EqualsGuard facade.
"""

from unittest.mock import patch

import pytest

from equalsguard import EqualsGuard
from equalsguard.analysis.models import AnalysisStage, MatchForm
from equalsguard.analysis.resolution import ScopeResolver
from equalsguard.config import EqualsGuardConfig
from equalsguard.parsing import ExpressionSyntaxError


@pytest.fixture
def guard():
    """Facade with default configuration."""
    return EqualsGuard()


class TestAnalyze:
    """Tests for EqualsGuard.analyze."""

    def test_finding(self, guard):
        """Test a finding for a guarded call."""
        result = guard.analyze("a != null && a.equals(b)", source_name="Foo.java:12")

        assert result.success
        assert result.source_name == "Foo.java:12"
        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.span_text == "a != null && a.equals(b)"
        assert finding.left_text == "a"
        assert finding.right_text == "b"
        assert finding.replacement == "java.util.Objects.equals(a, b)"
        assert finding.form is MatchForm.BINARY
        assert (finding.start, finding.end) == (0, 24)
        assert finding.negated is False

    def test_no_findings(self, guard):
        """Test an expression without idioms."""
        result = guard.analyze("a == b")
        assert result.success
        assert result.findings == []

    def test_parse_error_is_reported(self, guard):
        """Test that invalid input produces an error result instead of raising."""
        result = guard.analyze("a != null &&", source_name="bad")

        assert not result.success
        assert result.findings == []
        assert len(result.errors) == 1
        error = result.errors[0]
        assert error.stage is AnalysisStage.PARSE
        assert error.error_type == "ExpressionSyntaxError"
        assert error.source_name == "bad"

    def test_errors_do_not_leak_between_calls(self, guard):
        """Test that each result only carries the errors of its own input."""
        assert len(guard.analyze("a.equals(").errors) == 1

        result = guard.analyze("a.equals(b)")
        assert result.success
        assert result.errors == []
        assert not hasattr(guard, "error_handler")

    def test_analysis_failure_is_reported(self, guard):
        """Test that an exception during analysis is captured."""
        with patch.object(guard.detector, "scan", side_effect=RuntimeError("boom")):
            result = guard.analyze("a.equals(b)")

        assert not result.success
        assert result.errors[0].stage is AnalysisStage.ANALYZE
        assert result.errors[0].message == "boom"

    def test_to_dict(self, guard):
        """Test the serialisable form of a result."""
        data = guard.analyze("a == null || !a.equals(b)").to_dict()
        assert data["success"] is True
        assert data["findings"][0]["replacement"] == "!java.util.Objects.equals(a, b)"
        assert data["findings"][0]["form"] == "binary"
        assert data["metadata"]["expression"] == "a == null || !a.equals(b)"


class TestConfiguration:
    """Tests for configuration flowing into the detector."""

    def test_require_null_guard(self):
        """Test that bare calls are not reported when a guard is required."""
        config = EqualsGuardConfig.default()
        config.inspection_settings.require_explicit_null_guard = True
        guard = EqualsGuard(config)

        assert guard.analyze("a.equals(b)").findings == []
        assert len(guard.analyze("a != null && a.equals(b)").findings) == 1

    def test_language_level_gate(self):
        """Test that nothing is reported below Java 7."""
        config = EqualsGuardConfig.default()
        config.inspection_settings.language_level = 6
        guard = EqualsGuard(config)
        assert guard.analyze("a != null && a.equals(b)").findings == []

    def test_helper_name(self):
        """Test a custom helper name."""
        config = EqualsGuardConfig.default()
        config.inspection_settings.helper_name = "Objects.equals"
        guard = EqualsGuard(config)
        assert guard.fix("a.equals(b)") == "Objects.equals(a, b)"

    def test_scope_strategy(self):
        """Test that the scope strategy only names declared symbols."""
        config = EqualsGuardConfig.default()
        config.resolution_settings.strategy = "scope"
        config.resolution_settings.variables = ["b"]
        config.inspection_settings.require_explicit_null_guard = True
        guard = EqualsGuard(config)

        assert isinstance(guard.resolver, ScopeResolver)
        assert guard.analyze("a != null && a.equals(b)").findings == []
        assert len(guard.analyze("b != null && b.equals(a)").findings) == 1

    def test_explicit_resolver(self):
        """Test that an explicit resolver overrides the configured strategy."""
        resolver = ScopeResolver(variables=["x"])
        guard = EqualsGuard(resolver=resolver)
        assert guard.resolver is resolver


class TestBatch:
    """Tests for EqualsGuard.analyze_batch."""

    TEXTS = [
        "a != null && a.equals(b)",
        "a ==",
        "x == y",
        "p == null ? q == null : p.equals(q)",
    ]

    @pytest.mark.parametrize("workers", [1, 3])
    def test_order_and_isolation(self, guard, workers):
        """Test that results keep input order and one failure does not stop the rest."""
        results = guard.analyze_batch(self.TEXTS, max_workers=workers)

        assert [r.source_name for r in results] == ["<expr 1>", "<expr 2>", "<expr 3>", "<expr 4>"]
        assert [r.success for r in results] == [True, False, True, True]
        assert [len(r.findings) for r in results] == [1, 0, 0, 1]

    def test_source_names(self, guard):
        """Test explicit source names."""
        results = guard.analyze_batch(["a.equals(b)"], source_names=["Foo.java:3"])
        assert results[0].findings[0].source_name == "Foo.java:3"

    def test_source_names_length_mismatch(self, guard):
        """Test that mismatched names are rejected."""
        with pytest.raises(ValueError):
            guard.analyze_batch(["a", "b"], source_names=["only one"])

    def test_configured_workers(self):
        """Test that max_workers comes from configuration by default."""
        config = EqualsGuardConfig.default()
        config.output_settings.max_workers = 2
        guard = EqualsGuard(config)
        results = guard.analyze_batch(self.TEXTS)
        assert len(results) == 4


class TestFix:
    """Tests for EqualsGuard.fix."""

    def test_fix(self, guard):
        """Test that fix rewrites every finding."""
        assert guard.fix("x != y && (x == null || !x.equals(y))") == "!java.util.Objects.equals(x, y)"

    def test_fix_without_findings(self, guard):
        """Test that clean text is returned unchanged."""
        assert guard.fix("a  ==  b") == "a  ==  b"

    def test_fix_invalid_input(self, guard):
        """Test that fix raises on unparsable input."""
        with pytest.raises(ExpressionSyntaxError):
            guard.fix("a.equals(")
