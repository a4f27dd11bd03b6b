"""Commit history sources for contributor extraction.

A history source lists the author of every commit in a workspace. The git
implementation shells out to the ``git`` executable; tests substitute a
source that returns canned names.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from credits_tracker.exceptions import (
    HistoryUnavailableError,
    NotAVersionControlRootError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)


class BaseHistory(ABC):
    """Abstract base class for commit history sources."""

    @abstractmethod
    def list_commit_authors(self, root: Path) -> list[str]:
        """List the author name of every commit reachable in a workspace.

        Args:
            root: Workspace root directory.

        Returns:
            One raw author name per commit, duplicates retained, in a
            stable order.

        Raises:
            PathNotFoundError: If ``root`` does not exist.
            NotAVersionControlRootError: If ``root`` is not a repository.
            HistoryUnavailableError: If the history cannot be read.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the history source name for logging."""
        ...


class GitHistory(BaseHistory):
    """History source backed by ``git log``.

    Author names are read with ``%aN`` so a ``.mailmap`` in the repository
    is honoured. Commits are listed newest first.

    Attributes:
        executable: Name or path of the git executable.
    """

    LOG_FORMAT = "--pretty=format:%aN"

    def __init__(self, executable: str = "git") -> None:
        self.executable = executable

    @property
    def name(self) -> str:
        return "git"

    def _run(self, root: Path, *args: str) -> subprocess.CompletedProcess:
        cmd = [self.executable, "-C", str(root), *args]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise HistoryUnavailableError(
                root, f"cannot run {self.executable}: {e}"
            ) from e

    def list_commit_authors(self, root: Path) -> list[str]:
        if not root.is_dir():
            raise PathNotFoundError(root)

        inside = self._run(root, "rev-parse", "--is-inside-work-tree")
        if inside.returncode != 0 or inside.stdout.strip() != "true":
            raise NotAVersionControlRootError(root)

        head = self._run(root, "rev-parse", "--verify", "--quiet", "HEAD")
        if head.returncode != 0:
            # Only an unborn branch counts as an empty history
            branch = self._run(root, "symbolic-ref", "--quiet", "HEAD")
            if branch.returncode != 0:
                raise HistoryUnavailableError(
                    root,
                    "HEAD does not resolve to a commit",
                    returncode=head.returncode,
                    stderr=head.stderr,
                )
            logger.debug(f"{root} has no commits yet")
            return []

        log = self._run(root, "--no-pager", "log", self.LOG_FORMAT)
        if log.returncode != 0:
            raise HistoryUnavailableError(
                root,
                "git log failed",
                returncode=log.returncode,
                stderr=log.stderr,
            )

        return log.stdout.splitlines()
