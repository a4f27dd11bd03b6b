"""Exceptions raised by credits_tracker.

Every error carries the offending path (when there is one) and an optional
remediation hint that the CLI prints below the error message.
"""

from pathlib import Path
from typing import Optional


class CreditsTrackerError(Exception):
    """Base exception for all credits_tracker errors."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        hint: Optional[str] = None,
    ) -> None:
        self.path = path
        self.hint = hint
        super().__init__(message)


class PathNotFoundError(CreditsTrackerError):
    """Raised when a required directory does not exist."""

    def __init__(self, path: Path, hint: Optional[str] = None) -> None:
        super().__init__(f"Path not found: {path}", path=path, hint=hint)


class NotAVersionControlRootError(CreditsTrackerError):
    """Raised when the workspace is not inside a git work tree."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Not a git repository: {path}",
            path=path,
            hint="Run inside a git checkout or pass --allow-missing-history",
        )


class HistoryUnavailableError(CreditsTrackerError):
    """Raised when commit history cannot be read.

    Attributes:
        returncode: Exit status of the git process, if it ran.
        stderr: Error output of the git process, if any.
    """

    def __init__(
        self,
        path: Path,
        reason: str,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        message = f"Could not read commit history of {path}: {reason}"
        if returncode is not None:
            message += f" (exit {returncode})"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message, path=path)


class ManifestError(CreditsTrackerError, ValueError):
    """Raised when a dependency manifest cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid manifest {path}: {reason}", path=path)


class SerializationError(CreditsTrackerError):
    """Raised when a report cannot be encoded."""


class WriteError(CreditsTrackerError):
    """Raised when a report cannot be written to disk."""

    def __init__(self, path: Path, error: OSError) -> None:
        super().__init__(
            f"Failed to write {path}: {error.strerror or error}",
            path=path,
            hint="Check that the parent directory exists and is writable",
        )


class ConfigError(CreditsTrackerError):
    """Raised for an invalid configuration file or option value."""
