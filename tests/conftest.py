"""
Shared fixtures for equalsguard tests.
"""

import pytest

from equalsguard.analysis.detector import EqualsReplaceableDetector
from equalsguard.analysis.patterns import MatchContext
from equalsguard.analysis.resolution import ConventionResolver
from equalsguard.parsing import ExpressionParser


@pytest.fixture
def parser():
    """Expression parser."""
    return ExpressionParser()


@pytest.fixture
def resolver():
    """Naming-convention resolver with the default package roots."""
    return ConventionResolver()


@pytest.fixture
def detector(resolver):
    """Detector with default settings (bare calls reported)."""
    return EqualsReplaceableDetector(resolver=resolver)


@pytest.fixture
def strict_detector(resolver):
    """Detector that only reports calls guarded by a null check."""
    return EqualsReplaceableDetector(resolver=resolver, require_explicit_null_guard=True)


@pytest.fixture
def context_for(parser, resolver):
    """Build a (tree, MatchContext) pair for an expression."""

    def build(text):
        tree = parser.parse(text)
        return tree, MatchContext(tree=tree, resolver=resolver)

    return build


@pytest.fixture
def scan(parser, detector):
    """Parse an expression and return (tree, matches) from the default detector."""

    def run(text, using=None):
        tree = parser.parse(text)
        return tree, (using or detector).scan(tree)

    return run


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test without EQUALSGUARD_* variables, in an empty directory."""
    import os

    for name in list(os.environ):
        if name.startswith("EQUALSGUARD_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
