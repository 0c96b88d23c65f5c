"""
Tests for EqualsReplaceableDetector (call-site orchestration).
"""

from unittest.mock import Mock

import pytest

from equalsguard.analysis.detector import EqualsReplaceableDetector
from equalsguard.analysis.models import MatchForm
from equalsguard.analysis.nodes import (
    ExpressionTree,
    MethodCall,
    Reference,
    ThisExpression,
)
from equalsguard.analysis.resolution import SymbolKind
from equalsguard.refactoring.rewriter import apply_matches


class TestGuardedForms:
    """Tests for call-sites inside a guard or ternary."""

    def test_binary_guard(self, scan):
        """Test that a guarded call reports the whole guard."""
        tree, matches = scan("a != null && a.equals(b)")
        assert len(matches) == 1
        assert matches[0].span is tree.root
        assert matches[0].form is MatchForm.BINARY
        assert matches[0].negated is False

    def test_negated_binary_guard(self, scan):
        """Test the || form."""
        tree, matches = scan("a == null || !a.equals(b)")
        assert [m.negated for m in matches] == [True]
        assert matches[0].span is tree.root

    def test_ternary(self, scan):
        """Test that a ternary reports the whole conditional."""
        tree, matches = scan("a == null ? b == null : a.equals(b)")
        assert len(matches) == 1
        assert matches[0].span is tree.root
        assert matches[0].form is MatchForm.CONDITIONAL

    def test_widened_span(self, scan):
        """Test x != y && (x == null || !x.equals(y))."""
        tree, matches = scan("x != y && (x == null || !x.equals(y))")
        assert len(matches) == 1
        assert matches[0].span is tree.root
        assert matches[0].negated is True
        assert tree.text_of(matches[0].left_operand) == "x"
        assert tree.text_of(matches[0].right_operand) == "y"

    def test_guard_inside_larger_expression(self, scan):
        """Test that a guard nested in other code is still found."""
        tree, matches = scan("enabled && (a != null && a.equals(b))")
        assert len(matches) == 1
        assert tree.text_of(matches[0].span) == "a != null && a.equals(b)"

    def test_guard_under_negation(self, scan):
        """Test that the guard binary is found through parentheses and a not."""
        tree, matches = scan("!(a != null && a.equals(b))")
        assert len(matches) == 1
        assert tree.text_of(matches[0].span) == "a != null && a.equals(b)"

    def test_guarded_forms_ignore_require_flag(self, scan, strict_detector):
        """Test that guarded forms are reported when a null guard is required."""
        _, matches = scan("a != null && a.equals(b)", using=strict_detector)
        assert len(matches) == 1
        _, matches = scan("a != null ? a.equals(b) : b == null", using=strict_detector)
        assert len(matches) == 1


class TestBareCallFallback:
    """Tests for the bare equals call fallback."""

    def test_bare_call(self, scan):
        """Test that an unguarded call is reported on its own."""
        tree, matches = scan("a.equals(b)")
        assert len(matches) == 1
        assert matches[0].span is tree.root
        assert matches[0].form is MatchForm.DIRECT_CALL
        assert matches[0].negated is False

    def test_negated_bare_call(self, scan):
        """Test that the not stays outside the replaced span."""
        tree, matches = scan("!a.equals(b)")
        assert len(matches) == 1
        assert isinstance(matches[0].span, MethodCall)
        assert matches[0].negated is False
        assert apply_matches(tree, matches) == "!java.util.Objects.equals(a, b)"

    def test_bare_call_with_computed_operands(self, scan):
        """Test that operands do not need names for the fallback."""
        tree, matches = scan("getA().equals(b.c())")
        assert len(matches) == 1
        assert tree.text_of(matches[0].left_operand) == "getA()"

    def test_required_null_guard_suppresses_fallback(self, scan, strict_detector):
        """Test that no bare call is reported when a guard is required."""
        _, matches = scan("a.equals(b)", using=strict_detector)
        assert matches == []

    def test_mismatched_guard_falls_back(self, scan, strict_detector):
        """Test a != null && c.equals(b): only the bare call is reportable."""
        tree, matches = scan("a != null && c.equals(b)")
        assert len(matches) == 1
        assert matches[0].form is MatchForm.DIRECT_CALL
        assert tree.text_of(matches[0].span) == "c.equals(b)"

        _, matches = scan("a != null && c.equals(b)", using=strict_detector)
        assert matches == []

    def test_mismatched_ternary_falls_back(self, scan, strict_detector):
        """Test a ternary whose references do not line up."""
        _, matches = scan("a == null ? c == null : a.equals(b)")
        assert [m.form for m in matches] == [MatchForm.DIRECT_CALL]

        _, matches = scan("a == null ? c == null : a.equals(b)", using=strict_detector)
        assert matches == []

    @pytest.mark.parametrize(
        "text",
        [
            "x || a.equals(b)",
            "a.equals(b) || x",
            "a.equals(b) == flag",
            "a.equals(b) != flag",
        ],
    )
    def test_other_binary_contexts_suppress_fallback(self, scan, text):
        """Test that a call used as an operand of other binary expressions is left alone."""
        _, matches = scan(text)
        assert matches == []

    def test_and_context_falls_back(self, scan):
        """Test that an unrelated && operand still reports the bare call."""
        tree, matches = scan("flag && a.equals(b)")
        assert len(matches) == 1
        assert tree.text_of(matches[0].span) == "a.equals(b)"

    def test_cast_qualifier(self, scan, strict_detector):
        """Test that a cast operand is reported as a bare call only."""
        tree, matches = scan("((String) o).equals(x)")
        assert [m.form for m in matches] == [MatchForm.DIRECT_CALL]
        assert tree.text_of(matches[0].left_operand) == "(String) o"

        tree, matches = scan("o != null && ((String) o).equals(x)")
        assert [m.form for m in matches] == [MatchForm.DIRECT_CALL]
        assert tree.text_of(matches[0].span) == "((String) o).equals(x)"

        _, matches = scan("o != null && ((String) o).equals(x)", using=strict_detector)
        assert matches == []

    @pytest.mark.parametrize(
        "text",
        ["equals(b)", "a.equals(b, c)", "a.equals()", "a.hashCode()"],
    )
    def test_calls_without_fallback(self, scan, text):
        """Test calls that never produce a bare call match."""
        _, matches = scan(text)
        assert matches == []


class TestSelfComparison:
    """Tests for the this/super guard."""

    @pytest.mark.parametrize(
        "text",
        [
            "this.equals(x)",
            "super.equals(x)",
            "Outer.this.equals(x)",
            "(this).equals(x)",
            "x != null && this.equals(x)",
            "this == null ? x == null : this.equals(x)",
            "!super.equals(x)",
        ],
    )
    def test_never_matches(self, scan, text):
        """Test that self comparisons are never reported."""
        _, matches = scan(text)
        assert matches == []


class TestScan:
    """Tests for scanning whole trees."""

    def test_multiple_call_sites_in_order(self, scan):
        """Test that matches come back in pre-order."""
        tree, matches = scan("a.equals(b) ? c != null && c.equals(d) : e.equals(f)")
        texts = [tree.text_of(m.span) for m in matches]
        assert texts == ["a.equals(b)", "c != null && c.equals(d)", "e.equals(f)"]

    def test_span_reported_once(self, scan):
        """Test that a span is never reported twice."""
        _, matches = scan("a != null && a.equals(b) && c != null && c.equals(d)")
        spans = [m.span for m in matches]
        assert len(spans) == len(set(spans))

    def test_tree_without_source(self, detector):
        """Test that hand-built trees are analysed and rendered."""
        call = MethodCall("equals", Reference("a"), (Reference("b"),))
        tree = ExpressionTree(call)
        matches = detector.scan(tree)
        assert len(matches) == 1
        assert apply_matches(tree, matches) == "java.util.Objects.equals(a, b)"

    def test_hand_built_self_comparison(self, detector):
        """Test the self guard on a hand-built tree."""
        call = MethodCall("equals", ThisExpression(), (Reference("b"),))
        assert detector.scan(ExpressionTree(call)) == []


class TestCollaborators:
    """Tests for the pluggable collaborators."""

    def test_applicability_gate(self, parser, resolver):
        """Test that a closed gate disables the detector."""
        gate = Mock(return_value=False)
        detector = EqualsReplaceableDetector(resolver=resolver, applicability_gate=gate)
        tree = parser.parse("a != null && a.equals(b)")

        assert detector.scan(tree) == []
        assert detector.analyze_call(tree, tree.root.right) is None
        assert gate.called

    def test_analyze_call(self, parser, detector):
        """Test analysing a single call-site."""
        tree = parser.parse("a != null && a.equals(b)")
        match = detector.analyze_call(tree, tree.root.right)
        assert match.span is tree.root

    def test_analyze_call_ignores_other_methods(self, parser, detector):
        """Test that non-equals calls are not analysed."""
        tree = parser.parse("a.compareTo(b)")
        assert detector.analyze_call(tree, tree.root) is None

    def test_unresolvable_names(self, parser):
        """Test that failed resolution only disables the guarded forms."""
        resolver = Mock()
        resolver.resolve.return_value = SymbolKind.UNRESOLVED
        detector = EqualsReplaceableDetector(resolver=resolver)
        tree = parser.parse("a != null && a.equals(b)")

        matches = detector.scan(tree)
        assert [m.form for m in matches] == [MatchForm.DIRECT_CALL]
        assert resolver.resolve.called

    def test_custom_method_name(self, parser, resolver):
        """Test a detector for a differently named equality method."""
        detector = EqualsReplaceableDetector(resolver=resolver, method_name="isEqual")
        tree = parser.parse("a != null && a.isEqual(b)")
        assert [m.form for m in detector.scan(tree)] == [MatchForm.BINARY]
        assert detector.scan(parser.parse("a.equals(b)")) == []
