"""Find and read the test files a run should analyze.

Two sources: the files changed on the current branch (git diff against a
base ref) or explicit paths given on the command line.
"""
import re
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Tuple


DEFAULT_TEST_FILE_PATTERN = r'\.(test|spec)\.[jt]sx?$'

# Directories never walked when expanding a directory argument
EXCLUDED_DIRS = {
    'node_modules', '.git', 'dist', 'build', 'coverage', 'out',
    'vendor', 'third_party',
    'venv', '.venv', 'env', '.virtualenv',
    '.cache', '.next', '.turbo', '__pycache__',
}


class GitDiffError(RuntimeError):
    """git could not produce the list of changed files."""


def get_changed_test_files(
    base_ref: str = "main",
    pattern: str = DEFAULT_TEST_FILE_PATTERN,
    cwd: Optional[str | Path] = None,
) -> List[str]:
    """List test files changed between ``base_ref`` and HEAD.

    Args:
        base_ref: Branch or commit the diff is taken against
        pattern: Regex a path must match to count as a test file
        cwd: Repository directory (defaults to the current directory)

    Returns:
        List of repository-relative paths, in git's order

    Raises:
        GitDiffError: If git is missing or the diff command fails
    """
    test_file = re.compile(pattern)
    command = ["git", "diff", f"{base_ref}...HEAD", "--name-only"]

    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        raise GitDiffError("git executable not found") from e

    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit code {result.returncode}"
        raise GitDiffError(f"Failed to get changed files from git: {detail}")

    return [
        name for name in result.stdout.splitlines()
        if name and test_file.search(name)
    ]


def collect_test_files(
    paths: Iterable[str | Path],
    pattern: str = DEFAULT_TEST_FILE_PATTERN,
) -> List[str]:
    """Expand command-line paths into test files.

    Files are taken as given; directories are walked recursively (sorted,
    skipping EXCLUDED_DIRS) for names matching ``pattern``.
    """
    test_file = re.compile(pattern)
    collected: List[str] = []
    seen = set()

    def add(path: Path):
        key = str(path)
        if key not in seen:
            seen.add(key)
            collected.append(key)

    for raw_path in paths:
        path = Path(raw_path)
        if not path.is_dir():
            add(path)
            continue

        for candidate in sorted(path.rglob('*')):
            relative_parts = candidate.relative_to(path).parts
            if any(part in EXCLUDED_DIRS for part in relative_parts):
                continue
            if candidate.is_file() and test_file.search(candidate.name):
                add(candidate)

    return collected


def read_test_files(
    paths: Iterable[str],
    max_bytes: Optional[int] = None,
) -> Tuple[List[Tuple[str, bytes]], List[Tuple[str, str]]]:
    """Read test files for analysis.

    Content is returned as raw bytes; decoding is left to the analyzer so
    that a non-UTF-8 file shows up as a parse warning in the report.

    Returns:
        (files, skipped): ``(path, content)`` pairs and ``(path, reason)``
        pairs for files that were not read
    """
    files: List[Tuple[str, bytes]] = []
    skipped: List[Tuple[str, str]] = []

    for path in paths:
        try:
            size = Path(path).stat().st_size
            if max_bytes is not None and size > max_bytes:
                skipped.append((path, f"larger than {max_bytes} bytes ({size})"))
                continue
            files.append((path, Path(path).read_bytes()))
        except OSError as e:
            skipped.append((path, e.strerror or str(e)))

    return files, skipped
