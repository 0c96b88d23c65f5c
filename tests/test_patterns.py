"""
Tests for the negation, null-check and equals-call matchers.
"""

import pytest

from equalsguard.analysis.nodes import Binary, MethodCall, Prefix, Reference
from equalsguard.analysis.patterns import match_equals_call, match_null_check, unwrap_negation
from equalsguard.analysis.predicates import is_null_comparison


class TestUnwrapNegation:
    """Tests for unwrap_negation."""

    def test_plain_expression(self, parser):
        """Test that a non-negated expression is positive."""
        tree = parser.parse("a")
        inner, positive = unwrap_negation(tree.root)
        assert inner is tree.root
        assert positive is True

    def test_negation_with_parentheses(self, parser):
        """Test that parentheses are stripped on both sides of the not."""
        tree = parser.parse("(!(a))")
        inner, positive = unwrap_negation(tree.root)
        assert isinstance(inner, Reference)
        assert inner.name == "a"
        assert positive is False

    def test_only_one_level_is_stripped(self, parser):
        """Test that a double negation keeps the inner not."""
        tree = parser.parse("!!a")
        inner, positive = unwrap_negation(tree.root)
        assert isinstance(inner, Prefix)
        assert positive is False

    def test_arithmetic_negation_is_not_logical(self, parser):
        """Test that unary minus is not unwrapped."""
        tree = parser.parse("-a")
        inner, positive = unwrap_negation(tree.root)
        assert inner is tree.root
        assert positive is True


class TestIsNullComparison:
    """Tests for the default null comparison predicate."""

    def test_null_on_either_side(self, parser):
        """Test both operand orders."""
        assert is_null_comparison(parser.parse("a == null").root, True).name == "a"
        assert is_null_comparison(parser.parse("null == a").root, True).name == "a"

    def test_operator_must_match_expectation(self, parser):
        """Test that == and != are distinguished."""
        assert is_null_comparison(parser.parse("a == null").root, False) is None
        assert is_null_comparison(parser.parse("a != null").root, False).name == "a"

    def test_requires_null_literal(self, parser):
        """Test that comparisons without null are rejected."""
        assert is_null_comparison(parser.parse("a == b").root, True) is None
        assert is_null_comparison(parser.parse("a").root, True) is None


class TestMatchNullCheck:
    """Tests for match_null_check."""

    @pytest.mark.parametrize(
        "text, equal",
        [
            ("x == null", True),
            ("x != null", False),
            ("!(x == null)", False),
            ("!(x != null)", True),
            ("(null != x)", False),
        ],
    )
    def test_polarity(self, context_for, text, equal):
        """Test the polarity of every null check shape."""
        tree, ctx = context_for(text)
        match = match_null_check(ctx, tree.root)
        assert match is not None
        assert match.compared.name == "x"
        assert match.equal is equal

    def test_compared_operand_is_unparenthesized(self, context_for):
        """Test that the compared operand has its parentheses stripped."""
        tree, ctx = context_for("(this.x) == null")
        match = match_null_check(ctx, tree.root)
        assert isinstance(match.compared, Reference)
        assert ctx.name_of(match.compared) == "this.x"

    def test_non_null_comparisons(self, context_for):
        """Test shapes that are not null checks."""
        for text in ("x == y", "x.equals(null)", "x < null", "x"):
            tree, ctx = context_for(text)
            assert match_null_check(ctx, tree.root) is None

    def test_none(self, context_for):
        """Test that a missing expression is not a null check."""
        _, ctx = context_for("x")
        assert match_null_check(ctx, None) is None

    def test_custom_null_comparison(self, parser, resolver):
        """Test that the null comparison predicate is pluggable."""
        from equalsguard.analysis.patterns import MatchContext

        def left_operand_of_equality(expression, expect_equals):
            if isinstance(expression, Binary) and expect_equals:
                return expression.left
            return None

        tree = parser.parse("x == y")
        ctx = MatchContext(tree=tree, resolver=resolver, null_comparison=left_operand_of_equality)
        match = match_null_check(ctx, tree.root)
        assert match.compared.name == "x"
        assert match.equal is True


class TestMatchEqualsCall:
    """Tests for match_equals_call."""

    def test_plain_call(self, context_for):
        """Test a positive equals call."""
        tree, ctx = context_for("a.equals(b)")
        match = match_equals_call(ctx, tree.root)
        assert match.qualifier.name == "a"
        assert match.argument.name == "b"
        assert match.equal is True

    def test_negated_call(self, context_for):
        """Test a negated equals call."""
        tree, ctx = context_for("!a.equals(b)")
        match = match_equals_call(ctx, tree.root)
        assert match.equal is False

    def test_parenthesized_operands(self, context_for):
        """Test that qualifier and argument have their parentheses stripped."""
        tree, ctx = context_for("(a).equals((b))")
        match = match_equals_call(ctx, tree.root)
        assert isinstance(match.qualifier, Reference)
        assert isinstance(match.argument, Reference)

    def test_computed_operands_are_allowed(self, context_for):
        """Test that operands need not be nameable to match the call itself."""
        tree, ctx = context_for("getA().equals(b + c)")
        match = match_equals_call(ctx, tree.root)
        assert isinstance(match.qualifier, MethodCall)
        assert isinstance(match.argument, Binary)

    @pytest.mark.parametrize(
        "text",
        [
            "this.equals(b)",
            "super.equals(b)",
            "Outer.this.equals(b)",
            "(this).equals(b)",
            "equals(b)",
            "a.equals(b, c)",
            "a.equals()",
            "a.same(b)",
            "a",
        ],
    )
    def test_rejected_shapes(self, context_for, text):
        """Test calls that are never equals-call matches."""
        tree, ctx = context_for(text)
        assert match_equals_call(ctx, tree.root) is None

    def test_custom_method_name(self, parser, resolver):
        """Test that the equality method name is configurable."""
        from equalsguard.analysis.patterns import MatchContext

        tree = parser.parse("a.equalTo(b)")
        ctx = MatchContext(tree=tree, resolver=resolver, method_name="equalTo")
        assert match_equals_call(ctx, tree.root) is not None
