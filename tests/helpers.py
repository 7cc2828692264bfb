"""Helpers shared by dmc tests."""

import subprocess
from pathlib import Path

AUTHOR = "test@example.com"


def git(repo_path: Path, *args: str) -> None:
    """Run a git command in ``repo_path``, failing the test on error."""
    subprocess.run(
        ["git", *args],
        cwd=repo_path,
        check=True,
        capture_output=True,
    )


def make_commit(repo_path: Path, filename: str, content: str, message: str) -> None:
    """Write a file and commit it."""
    (repo_path / filename).parent.mkdir(parents=True, exist_ok=True)
    (repo_path / filename).write_text(content)
    git(repo_path, "add", ".")
    git(repo_path, "commit", "-m", message)


def gemini_response(text: str = "Hello") -> dict:
    """Build a minimal generateContent response."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}
