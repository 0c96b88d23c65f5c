"""
Output formatters for CLI commands.

Formats analysis results as plain text or JSON.
"""

import json
from typing import Any, Dict, List

from equalsguard.analysis.models import AnalysisResult


def summarize_results(results: List[AnalysisResult]) -> Dict[str, int]:
    """Count analysed expressions, findings and failures."""
    return {
        "expressions": len(results),
        "findings": sum(len(r.findings) for r in results),
        "errors": sum(len(r.errors) for r in results),
    }


def results_payload(results: List[AnalysisResult]) -> Dict[str, Any]:
    """JSON-serialisable payload for a list of results."""
    return {
        "results": [r.to_dict() for r in results],
        "summary": summarize_results(results),
    }


def format_findings(results: List[AnalysisResult], format_type: str) -> str:
    """Format check results for output."""
    if format_type == "json":
        return json.dumps(results_payload(results), indent=2, ensure_ascii=False)

    lines = []
    for result in results:
        for finding in result.findings:
            location = result.source_name
            if finding.start is not None:
                location += f" [{finding.start}:{finding.end}]"
            lines.append(f"{location}: {finding.message}")
            lines.append(f"  {finding.span_text}")
            lines.append(f"  -> {finding.replacement}")
        fixed = result.metadata.get("fixed")
        if fixed is not None and result.findings:
            lines.append(f"  fixed: {fixed}")
        for error in result.errors:
            lines.append(f"{result.source_name}: {error.stage.value} error: {error.message}")

    summary = summarize_results(results)
    lines.append(
        f"{summary['findings']} finding(s) in {summary['expressions']} expression(s), "
        f"{summary['errors']} error(s)"
    )
    return "\n".join(lines)
