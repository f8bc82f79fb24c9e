"""Result records for tautological test detection.

Every record is created once per analysis and never mutated afterwards.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


# Share of tautological tests above which a run blocks merge-readiness
BLOCKING_THRESHOLD = 50.0


class ParseError(Exception):
    """Extraction failed on one file's text."""


class BlockStyle(str, Enum):
    """Which call introduced a test block."""

    IT = "it"
    TEST = "test"


@dataclass(frozen=True)
class ImportedSymbol:
    """A binding imported from a production source module."""
    name: str
    module_path: str


@dataclass(frozen=True)
class TestBlock:
    """One it()/test() block and whether it touches production code."""
    __test__ = False

    description: str
    line_number: int
    style: BlockStyle
    is_tautological: bool


@dataclass(frozen=True)
class FileResult:
    """Analysis of a single test file.

    When parse_success is False the counts are zero and test_blocks is
    empty; parse_error carries the reason.
    """
    file_path: str
    total_tests: int
    tautological_count: int
    tautological_percentage: float
    test_blocks: List[TestBlock] = field(default_factory=list)
    imported_symbols: List[ImportedSymbol] = field(default_factory=list)
    parse_success: bool = True
    parse_error: Optional[str] = None

    @property
    def tautological_blocks(self) -> List[TestBlock]:
        return [block for block in self.test_blocks if block.is_tautological]


@dataclass(frozen=True)
class RunSummary:
    total_files: int
    total_tests: int
    total_tautological: int
    overall_percentage: float
    exceeds_blocking_threshold: bool


@dataclass(frozen=True)
class RunResult:
    """Everything the reporter needs for one detector run."""
    file_results: List[FileResult]
    summary: RunSummary

    @property
    def parse_failures(self) -> List[FileResult]:
        return [result for result in self.file_results if not result.parse_success]
