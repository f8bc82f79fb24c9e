"""Per-file analysis and run-level aggregation.

    files -> analyze_file (each) -> analyze_batch -> RunResult

Files are analyzed independently and in input order. A file that cannot
be analyzed becomes a FileResult with parse_success=False; nothing here
raises to the caller.
"""
from typing import Iterable, List, Tuple, Union

from .import_tracker import extract_imports
from .models import (
    BLOCKING_THRESHOLD,
    FileResult,
    ParseError,
    RunResult,
    RunSummary,
    TestBlock,
)
from .reference_checker import references_production
from .test_blocks import extract_test_blocks


FileContent = Union[str, bytes]


def _percentage(part: int, total: int) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def _as_text(content: FileContent) -> str:
    """Normalize file content to text, rejecting anything undecodable."""
    if isinstance(content, str):
        return content
    if isinstance(content, bytes):
        try:
            return content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseError(f"File is not valid UTF-8: {e}") from e
    raise ParseError(f"Expected text content, got {type(content).__name__}")


def analyze_file(file_path: str, content: FileContent) -> FileResult:
    """Flag the tautological test blocks of one test file.

    Args:
        file_path: Path reported back in the result
        content: File text (or UTF-8 bytes)

    Returns:
        FileResult: Per-block flags and file-level counts
    """
    try:
        text = _as_text(content)
        imported_symbols = extract_imports(text)

        test_blocks = [
            TestBlock(
                description=raw.description,
                line_number=raw.line_number,
                style=raw.style,
                is_tautological=not references_production(raw.body, imported_symbols),
            )
            for raw in extract_test_blocks(text)
        ]
    except Exception as e:
        return FileResult(
            file_path=file_path,
            total_tests=0,
            tautological_count=0,
            tautological_percentage=0.0,
            parse_success=False,
            parse_error=str(e) or "Unknown parse error",
        )

    total_tests = len(test_blocks)
    tautological_count = sum(1 for block in test_blocks if block.is_tautological)

    return FileResult(
        file_path=file_path,
        total_tests=total_tests,
        tautological_count=tautological_count,
        tautological_percentage=_percentage(tautological_count, total_tests),
        test_blocks=test_blocks,
        imported_symbols=imported_symbols,
    )


def summarize(file_results: List[FileResult]) -> RunSummary:
    """Sum per-file counts into run totals."""
    total_tests = sum(result.total_tests for result in file_results)
    total_tautological = sum(result.tautological_count for result in file_results)
    overall_percentage = _percentage(total_tautological, total_tests)

    return RunSummary(
        total_files=len(file_results),
        total_tests=total_tests,
        total_tautological=total_tautological,
        overall_percentage=overall_percentage,
        exceeds_blocking_threshold=overall_percentage > BLOCKING_THRESHOLD,
    )


def analyze_batch(files: Iterable[Tuple[str, FileContent]]) -> RunResult:
    """Analyze ``(path, content)`` pairs and aggregate the run."""
    file_results = [analyze_file(path, content) for path, content in files]
    return RunResult(file_results=file_results, summary=summarize(file_results))
