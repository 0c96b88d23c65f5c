"""
Data models for equality-idiom matching.

Intermediate matches (null checks, equals calls) and the final rewrite
match are immutable and reference nodes of the analysed tree by identity.
Findings are the host-facing, serialisable form of a rewrite match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .nodes import ExpressionNode


class MatchForm(Enum):
    """Surface syntax a rewrite match was recognised from."""

    BINARY = "binary"
    CONDITIONAL = "conditional"
    DIRECT_CALL = "direct_call"


@dataclass(frozen=True)
class NullCheckMatch:
    """``compared == null`` when ``equal`` is true, ``compared != null`` otherwise."""

    compared: ExpressionNode
    equal: bool


@dataclass(frozen=True)
class EqualsCallMatch:
    """``qualifier.equals(argument)``, negated when ``equal`` is false."""

    qualifier: ExpressionNode
    argument: ExpressionNode
    equal: bool


@dataclass(frozen=True)
class RewriteMatch:
    """
    A proposed replacement of ``span`` by a null-safe equality helper call.

    ``left_operand`` and ``right_operand`` are passed to the helper in that
    order; the call is prefixed with ``!`` when ``negated`` is set.
    """

    span: ExpressionNode
    left_operand: ExpressionNode
    right_operand: ExpressionNode
    negated: bool
    form: MatchForm


@dataclass
class EqualsFinding:
    """Reportable finding for a single rewrite match."""

    source_name: str
    span_text: str
    left_text: str
    right_text: str
    replacement: str
    negated: bool
    form: MatchForm
    start: Optional[int] = None
    end: Optional[int] = None
    message: str = "'equals()' expression replaceable by 'Objects.equals()' expression"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "source_name": self.source_name,
            "span_text": self.span_text,
            "left_text": self.left_text,
            "right_text": self.right_text,
            "replacement": self.replacement,
            "negated": self.negated,
            "form": self.form.value,
            "start": self.start,
            "end": self.end,
            "message": self.message,
        }


class AnalysisStage(Enum):
    READ = "read"
    PARSE = "parse"
    ANALYZE = "analyze"
    REWRITE = "rewrite"


@dataclass
class AnalysisError:
    source_name: str
    stage: AnalysisStage
    error_type: str
    message: str
    line_number: Optional[int] = None
    traceback: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_name": self.source_name,
            "stage": self.stage.value,
            "error_type": self.error_type,
            "message": self.message,
            "line_number": self.line_number,
            "traceback": self.traceback,
            "metadata": self.metadata,
        }


@dataclass
class AnalysisResult:
    """Result of analysing one expression source."""

    success: bool
    source_name: str
    findings: List[EqualsFinding] = field(default_factory=list)
    errors: List[AnalysisError] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "source_name": self.source_name,
            "findings": [f.to_dict() for f in self.findings],
            "errors": [e.to_dict() for e in self.errors],
            "metadata": self.metadata,
        }
