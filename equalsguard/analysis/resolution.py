"""
Symbol resolution for name references.

The matchers never reason about types; they only ask a resolver whether a
reference denotes a variable (local, parameter, field) or a class. Any other
answer, including failure to resolve, makes the reference unnameable.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable, Optional, Protocol

from .nodes import ExpressionNode, Reference, SuperExpression, ThisExpression, strip_parentheses


class SymbolKind(Enum):
    VARIABLE = "variable"
    CLASS = "class"
    PACKAGE = "package"
    OTHER = "other"
    UNRESOLVED = "unresolved"

    @property
    def is_nameable(self) -> bool:
        return self in (SymbolKind.VARIABLE, SymbolKind.CLASS)


class SymbolResolver(Protocol):
    """Protocol for resolvers consulted by the reference namer."""

    def resolve(self, reference: Reference) -> SymbolKind:
        """Classify what ``reference`` refers to."""
        ...


def dotted_name(node: Optional[ExpressionNode]) -> Optional[str]:
    """Return ``a.b.c`` for a pure identifier chain, None for anything else."""
    node = strip_parentheses(node)
    if not isinstance(node, Reference):
        return None
    if node.qualifier is None:
        return node.name
    prefix = dotted_name(node.qualifier)
    return f"{prefix}.{node.name}" if prefix is not None else None


class ScopeResolver:
    """
    Resolver backed by an explicit symbol table.

    Dotted entries (``Outer.Inner``, ``java.util``) are matched against the
    full identifier chain. A member selected from a variable, a class,
    ``this``/``super`` or a computed expression is taken to be a field.
    """

    def __init__(
        self,
        variables: Iterable[str] = (),
        classes: Iterable[str] = (),
        packages: Iterable[str] = (),
    ):
        self.variables: FrozenSet[str] = frozenset(variables)
        self.classes: FrozenSet[str] = frozenset(classes)
        self.packages: FrozenSet[str] = frozenset(packages)

    def resolve(self, reference: Reference) -> SymbolKind:
        path = dotted_name(reference)
        if path is not None:
            if path in self.classes:
                return SymbolKind.CLASS
            if path in self.packages:
                return SymbolKind.PACKAGE
            if path in self.variables:
                return SymbolKind.VARIABLE

        qualifier = strip_parentheses(reference.qualifier)
        if qualifier is None:
            return SymbolKind.UNRESOLVED
        if isinstance(qualifier, (ThisExpression, SuperExpression)):
            return SymbolKind.VARIABLE
        if isinstance(qualifier, Reference):
            qualifier_kind = self.resolve(qualifier)
            if qualifier_kind.is_nameable:
                return SymbolKind.VARIABLE
            return SymbolKind.UNRESOLVED
        # field of a computed value, e.g. foo().bar
        return SymbolKind.VARIABLE


DEFAULT_PACKAGE_ROOTS = ("java", "javax", "com", "org", "net")


class ConventionResolver:
    """
    Resolver that classifies names by Java naming conventions.

    Used when no symbol table is available: ``UpperCamel`` names are classes,
    ``lowerCamel`` and ``CONSTANT_CASE`` names are variables, and chains that
    start at a known package root stay packages while they are lower case.
    """

    def __init__(self, package_roots: Iterable[str] = DEFAULT_PACKAGE_ROOTS):
        self.package_roots: FrozenSet[str] = frozenset(package_roots)

    @staticmethod
    def _looks_like_class(name: str) -> bool:
        return name[:1].isupper() and not name.isupper()

    def resolve(self, reference: Reference) -> SymbolKind:
        name = reference.name
        qualifier = strip_parentheses(reference.qualifier)

        if qualifier is None:
            if name in self.package_roots:
                return SymbolKind.PACKAGE
            return SymbolKind.CLASS if self._looks_like_class(name) else SymbolKind.VARIABLE

        if isinstance(qualifier, Reference):
            qualifier_kind = self.resolve(qualifier)
            if qualifier_kind is SymbolKind.PACKAGE:
                if self._looks_like_class(name):
                    return SymbolKind.CLASS
                return SymbolKind.PACKAGE if name.islower() else SymbolKind.UNRESOLVED
            if not qualifier_kind.is_nameable:
                return SymbolKind.UNRESOLVED

        if self._looks_like_class(name) and not isinstance(
            qualifier, (ThisExpression, SuperExpression)
        ):
            return SymbolKind.CLASS
        return SymbolKind.VARIABLE
