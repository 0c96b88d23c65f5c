"""
Error isolation for equalsguard analysis stages.

A failing stage (an unparsable expression, an unexpected exception while
matching) is recorded as an ``AnalysisError`` and analysis moves on to the
next input.
"""

import logging
import traceback
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from .models import AnalysisError, AnalysisStage

logger = logging.getLogger(__name__)

T = TypeVar('T')


class StandardErrorHandler:
    """Collects the errors of one analysis run."""

    def __init__(self):
        self._errors: List[AnalysisError] = []

    def add_error(self, error: AnalysisError) -> None:
        self._errors.append(error)
        logger.debug(f"Recorded {error.stage.value} error for {error.source_name}: {error.message}")

    def get_errors(self) -> List[AnalysisError]:
        """Recorded errors, oldest first (a copy)."""
        return list(self._errors)


def safe_run(
    stage: AnalysisStage,
    source_name: str,
    func: Callable[..., T],
    *args,
    error_handler: Optional[StandardErrorHandler] = None,
    **kwargs
) -> Tuple[Optional[T], Optional[AnalysisError]]:
    """
    Run one analysis stage, turning an exception into an ``AnalysisError``.

    Args:
        stage: Stage being run (parse, analyze, ...)
        source_name: Name of the input the stage works on
        func: Stage function, called with ``*args`` and ``**kwargs``
        error_handler: Optional collector the error is added to

    Returns:
        ``(result, None)`` on success, ``(None, error)`` on failure
    """
    try:
        return func(*args, **kwargs), None
    except Exception as e:
        error = _create_analysis_error(stage, source_name, e)
        if error_handler is not None:
            error_handler.add_error(error)
        logger.warning(f"{stage.value.capitalize()} failed for {source_name}: {error.message}")
        return None, error


def _create_analysis_error(
    stage: AnalysisStage,
    source_name: str,
    exception: Exception
) -> AnalysisError:
    # ExpressionSyntaxError carries the offending line
    line_number: Any = getattr(exception, "line", None)
    return AnalysisError(
        source_name=source_name,
        stage=stage,
        error_type=type(exception).__name__,
        message=str(exception),
        line_number=line_number if isinstance(line_number, int) else None,
        traceback=traceback.format_exc(),
        metadata={"column": getattr(exception, "column", None)},
    )
