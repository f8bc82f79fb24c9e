"""Markdown report, JSON payload and merge verdict for a detector run."""
from enum import Enum
from typing import Any, Dict, List

from .analyzer.models import RunResult


class ReportStatus(str, Enum):
    OK = "ok"
    WARN = "warn"
    FAIL = "fail"
    SKIP = "skip"


class Verdict(str, Enum):
    """Impact of a run on the surrounding quality gate."""

    NONE = "none"
    WARNING = "warning"
    BLOCKING = "blocking"


STATUS_LABELS = {
    ReportStatus.OK: "✅ OK",
    ReportStatus.WARN: "⚠️ WARN",
    ReportStatus.FAIL: "❌ FAIL",
    ReportStatus.SKIP: "⏭️ SKIP",
}


def report_status(results: RunResult) -> ReportStatus:
    summary = results.summary
    if summary.total_tests == 0:
        return ReportStatus.SKIP
    if summary.exceeds_blocking_threshold:
        return ReportStatus.FAIL
    if summary.total_tautological > 0:
        return ReportStatus.WARN
    return ReportStatus.OK


def verdict(results: RunResult) -> Verdict:
    """Map run totals to the verdict consumed by the merge gate."""
    summary = results.summary
    if summary.total_tests == 0 or summary.total_tautological == 0:
        return Verdict.NONE
    if summary.exceeds_blocking_threshold:
        return Verdict.BLOCKING
    return Verdict.WARNING


def _parse_warning_lines(results: RunResult) -> List[str]:
    # Parse failures never change the verdict; they are listed for review
    failures = results.parse_failures
    if not failures:
        return []

    lines = ["**Parse Warnings:**"]
    for failure in failures:
        lines.append(f"- `{failure.file_path}`: {failure.parse_error}")
    lines.append("")
    return lines


def render_report(results: RunResult) -> str:
    """Render the run as the QA "Test Quality Review" markdown section."""
    summary = results.summary
    status = report_status(results)

    lines: List[str] = [
        "### Test Quality Review",
        "",
        "| Category | Status | Notes |",
        "|----------|--------|-------|",
    ]

    if status is ReportStatus.SKIP:
        lines.append(f"| Tautology Check | {STATUS_LABELS[status]} | No test blocks found |")
        warnings = _parse_warning_lines(results)
        if warnings:
            lines.append("")
            lines.extend(warnings)
        return "\n".join(lines)

    if summary.total_tautological > 0:
        notes = (
            f"{summary.total_tautological} tautological test blocks found "
            f"({summary.overall_percentage:.1f}%)"
        )
    else:
        notes = "All tests call production code"

    lines.append(f"| Tautology Check | {STATUS_LABELS[status]} | {notes} |")
    lines.append("")

    if summary.total_tautological > 0:
        lines.append("**Tautological Tests Found:**")
        lines.append("")
        for file_result in results.file_results:
            for block in file_result.tautological_blocks:
                lines.append(
                    f"- `{file_result.file_path}:{block.line_number}` - "
                    f"`{block.style.value}(\"{block.description}\")` - No production function calls"
                )
        lines.append("")

    if summary.exceeds_blocking_threshold:
        lines.append("**Verdict Impact:** >50% tautological tests — blocks `READY_FOR_MERGE`")
        lines.append("")

    lines.extend(_parse_warning_lines(results))
    return "\n".join(lines)


def results_to_json(results: RunResult) -> Dict[str, Any]:
    """Build the machine-readable payload printed by ``scan --json``."""
    summary = results.summary
    files = []
    for file_result in results.file_results:
        entry: Dict[str, Any] = {
            "path": file_result.file_path,
            "totalTests": file_result.total_tests,
            "tautologicalCount": file_result.tautological_count,
            "parseSuccess": file_result.parse_success,
            "tautologicalTests": [
                {
                    "line": block.line_number,
                    "description": block.description,
                    "style": block.style.value,
                }
                for block in file_result.tautological_blocks
            ],
        }
        if not file_result.parse_success:
            entry["parseError"] = file_result.parse_error
        files.append(entry)

    return {
        "status": verdict(results).value,
        "summary": {
            "totalFiles": summary.total_files,
            "totalTests": summary.total_tests,
            "totalTautological": summary.total_tautological,
            "overallPercentage": summary.overall_percentage,
            "exceedsBlockingThreshold": summary.exceeds_blocking_threshold,
        },
        "files": files,
    }
