"""
Check command for equalsguard CLI.

Analyses Java expressions given on the command line or read from a file,
one expression per line.
"""

import logging
import sys
from pathlib import Path
from typing import List, Tuple

from equalsguard.api import EqualsGuard
from equalsguard.analysis.models import AnalysisResult
from equalsguard.cli.formatters import format_findings, results_payload
from equalsguard.cli.rich_output import get_rich_output
from equalsguard.config import EqualsGuardConfig

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_ERROR = 1
EXIT_FINDINGS = 2


def read_expression_file(path: str) -> List[Tuple[str, str]]:
    """
    Read ``(source_name, expression)`` pairs from a file.

    Blank lines and ``//`` comment lines are skipped; source names carry the
    line number.
    """
    expressions = []
    text = Path(path).read_text(encoding="utf-8")
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("//"):
            continue
        expressions.append((f"{path}:{line_number}", stripped))
    return expressions


def apply_check_options(args, config: EqualsGuardConfig) -> EqualsGuardConfig:
    """Override configuration values with command-line options."""
    inspection = config.inspection_settings
    if getattr(args, "require_null_guard", False):
        inspection.require_explicit_null_guard = True
    if getattr(args, "language_level", None) is not None:
        inspection.language_level = args.language_level

    resolution = config.resolution_settings
    variables = getattr(args, "variable", None) or []
    classes = getattr(args, "class_names", None) or []
    if variables or classes:
        resolution.strategy = "scope"
        resolution.variables = list(resolution.variables) + list(variables)
        resolution.classes = list(resolution.classes) + list(classes)

    if getattr(args, "format", None):
        config.output_settings.format = args.format

    config.validate()
    return config


def _collect_inputs(args) -> List[Tuple[str, str]]:
    inputs = []
    if getattr(args, "file", None):
        inputs.extend(read_expression_file(args.file))
    for index, expression in enumerate(getattr(args, "expressions", None) or [], start=1):
        inputs.append((f"<arg {index}>", expression))
    return inputs


def _attach_fixes(guard: EqualsGuard, results: List[AnalysisResult], texts: List[str]) -> None:
    for result, text in zip(results, texts):
        if result.success and result.findings:
            result.metadata["fixed"] = guard.fix(text)


def _print_rich(results: List[AnalysisResult]) -> None:
    rich_output = get_rich_output()
    findings = [f for r in results for f in r.findings]
    if findings:
        rich_output.print_findings(findings)
    for result in results:
        fixed = result.metadata.get("fixed")
        if fixed is not None:
            rich_output.print_expression(fixed, title=f"Fixed {result.source_name}")
        for error in result.errors:
            rich_output.print_error(f"{result.source_name}: {error.message}")
    if findings:
        rich_output.print_warning(f"{len(findings)} replaceable equality check(s) found")
    else:
        rich_output.print_success(f"No replaceable equality checks in {len(results)} expression(s)")


def exit_code_for(results: List[AnalysisResult]) -> int:
    """1 when any input failed, 2 when findings were reported, 0 otherwise."""
    if any(not r.success for r in results):
        return EXIT_ERROR
    if any(r.findings for r in results):
        return EXIT_FINDINGS
    return EXIT_CLEAN


def cmd_check(args, config: EqualsGuardConfig) -> int:
    """Handle check command."""
    from equalsguard.cli_entry import _is_machine_readable, _maybe_print_output, _print_json_to_stdout

    inputs = _collect_inputs(args)
    if not inputs:
        print("Error: no expressions to check (pass EXPR arguments or --file)", file=sys.stderr)
        return EXIT_ERROR

    config = apply_check_options(args, config)
    guard = EqualsGuard(config)

    names = [name for name, _ in inputs]
    texts = [text for _, text in inputs]
    results = guard.analyze_batch(texts, source_names=names)
    if getattr(args, "fix", False):
        _attach_fixes(guard, results, texts)

    logger.debug(f"Checked {len(results)} expression(s)")

    if _is_machine_readable(args):
        _print_json_to_stdout(args, results_payload(results))
    elif config.output_settings.format == "json":
        _maybe_print_output(args, format_findings(results, "json"))
    elif get_rich_output().use_rich:
        _print_rich(results)
    else:
        _maybe_print_output(args, format_findings(results, "text"))

    return exit_code_for(results)
