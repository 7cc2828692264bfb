"""Git utilities for collecting commit history."""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dmc.config.models import DMCConfig, Interval

from .exceptions import GitOperationError

logger = logging.getLogger(__name__)

COMMIT_HEADER = "commit "


@dataclass(frozen=True)
class LogQuery:
    """Declarative description of a ``git log`` invocation.

    The argument order is fixed: date bounds, branch references, merge
    filter, author filter, then path exclusions after a single ``--``.
    """

    since: str
    until: str
    author: str
    branches: Tuple[str, ...] = ()
    include_merges: bool = False
    exclude_paths: Tuple[str, ...] = ()

    @classmethod
    def from_config(
        cls, config: DMCConfig, interval: Interval, author: str
    ) -> "LogQuery":
        """Build a query from an interval and the configured git settings."""
        settings = config.git_settings
        return cls(
            since=interval.since,
            until=interval.until,
            author=author,
            branches=tuple(settings.branches),
            include_merges=settings.include_merges,
            exclude_paths=tuple(settings.exclude_paths),
        )

    def to_args(self) -> Tuple[str, ...]:
        """Return the git arguments, starting with the ``log`` subcommand."""
        args = [
            "log",
            f"--since={self.since}",
            f"--until={self.until}",
            *self.branches,
        ]
        if not self.include_merges:
            args.append("--no-merges")
        args.append(f"--author={self.author}")
        if self.exclude_paths:
            args.append("--")
            args.extend(f":!{path}" for path in self.exclude_paths)
        return tuple(args)


@dataclass
class CommitBatch:
    """Raw ``git log`` lines for one fetch."""

    lines: List[str] = field(default_factory=list)
    commit_count: int = 0
    repository: Optional[str] = None

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


class GitUtils:
    """
    Thin wrapper around the git CLI.

    Provides safe wrappers around the git commands dmc needs to find the
    repository and read its history.
    """

    def __init__(self, repo_path: Optional[Path] = None):
        """
        Initialize Git utilities.

        Args:
            repo_path: Path to git repository (default: current directory)
        """
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()

    def _run_git(self, *args: str, check: bool = True) -> Tuple[int, str, str]:
        """
        Run a git command.

        Args:
            args: Git command arguments
            check: Raise error on non-zero exit

        Returns:
            Tuple of (returncode, stdout, stderr)

        Raises:
            GitOperationError: If command fails and check=True
        """
        logger.debug("Running git %s in %s", " ".join(args), self.repo_path)
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise GitOperationError("Git command not found") from e
        except OSError as e:
            raise GitOperationError(f"Git operation failed: {e}") from e

        if check and result.returncode != 0:
            raise GitOperationError(
                f"Git command failed: git {' '.join(args)}\n"
                f"Error: {result.stderr.strip()}"
            )

        return result.returncode, result.stdout, result.stderr

    def is_git_repo(self) -> bool:
        """Check if the directory is inside a git working tree."""
        if (self.repo_path / ".git").exists():
            return True

        # We may be in a subdirectory of a repository
        try:
            returncode, _, _ = self._run_git("rev-parse", "--git-dir", check=False)
        except GitOperationError:
            return False
        return returncode == 0

    def get_repository_info(self) -> str:
        """
        Describe the repository for user feedback.

        Returns:
            The ``origin`` remote URL, or ``Local repository: <path>``
        """
        returncode, stdout, _ = self._run_git(
            "remote", "get-url", "origin", check=False
        )
        if returncode == 0 and stdout.strip():
            return stdout.strip()

        return f"Local repository: {self.repo_path.resolve()}"

    def log(self, query: LogQuery) -> str:
        """
        Run ``git log`` for a query.

        Args:
            query: Log query to execute

        Returns:
            Raw stdout

        Raises:
            GitOperationError: If git exits non-zero
        """
        _, stdout, _ = self._run_git(*query.to_args())
        return stdout


class CommitFetcher:
    """Collect an author's commits for a configured interval."""

    def __init__(self, config: DMCConfig, repo_path: Optional[Path] = None):
        self.config = config
        self.git = GitUtils(repo_path)

    def fetch_commits(self, author: str, interval_key: str) -> CommitBatch:
        """
        Fetch raw log lines for ``author`` within an interval.

        Args:
            author: Author filter passed to ``git log --author``
            interval_key: Key into the configured intervals

        Returns:
            CommitBatch, empty when the author has no commits in range

        Raises:
            IntervalNotFoundError: If the interval is not configured
            GitOperationError: If not in a repository or git fails
        """
        interval = self.config.get_interval(interval_key)

        if not self.git.is_git_repo():
            raise GitOperationError(
                "current directory is not a git repository. "
                "Please run dmc from within a git repository"
            )

        try:
            repository = self.git.get_repository_info()
        except GitOperationError as e:
            logger.warning("Could not get repository info: %s", e)
            repository = None

        query = LogQuery.from_config(self.config, interval, author)

        try:
            output = self.git.log(query)
        except GitOperationError as e:
            raise GitOperationError(
                f"{e}. Make sure you have commits from author '{author}'"
            ) from e

        lines = split_log_output(output)
        commit_count = count_commits(lines)
        logger.debug(
            "Found %d commits from %s to %s", commit_count, interval.since, interval.until
        )

        return CommitBatch(lines=lines, commit_count=commit_count, repository=repository)

    def available_intervals(self) -> List[str]:
        """List the configured interval keys."""
        return list(self.config.intervals)


def split_log_output(output: str) -> List[str]:
    """Split ``git log`` output into lines, mapping blank output to ``[]``."""
    stripped = output.strip()
    if not stripped:
        return []
    return stripped.split("\n")


def count_commits(lines: Sequence[str]) -> int:
    """Count commit header lines in default ``git log`` output."""
    return sum(1 for line in lines if line.startswith(COMMIT_HEADER))
