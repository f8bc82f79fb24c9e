"""Shared fixtures: a throwaway git repository with changed test files."""
import shutil
import subprocess
from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).parent / 'fixtures' / 'js_tests'

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(repo: Path, *args: str):
    subprocess.run(
        ["git", "-c", "user.email=dev@example.com", "-c", "user.name=Dev", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def repo(tmp_path):
    """Git repo with a 'main' branch and a 'feature' branch adding two test files.

    src/fn.test.ts calls production code, src/view.spec.jsx does not.
    """
    git(tmp_path, "init", "-q")
    git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    (tmp_path / "README.md").write_text("# demo\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-q", "-m", "initial")

    git(tmp_path, "checkout", "-q", "-b", "feature")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "fn.ts").write_text("export const fn = () => 1;\n")
    (tmp_path / "src" / "fn.test.ts").write_text("import { fn } from './fn';\nit('a', () => { fn(); });\n")
    (tmp_path / "src" / "view.spec.jsx").write_text("it('b', () => {});\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-q", "-m", "feature")
    return tmp_path
