"""Base interface for dependency manifest scanners.

Scanners extract package declarations from the manifests written by Swift
Package Manager, Xcode and Carthage, without resolving or building anything.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from credits_tracker.exceptions import ManifestError
from credits_tracker.models import Package

logger = logging.getLogger(__name__)

# Matches scp-like git locations such as "git@github.com:owner/repo.git"
SCP_LOCATION_PATTERN = re.compile(r"^[\w.-]+@[\w.-]+:(?!//)")

REMOTE_SCHEMES = ("http://", "https://", "ssh://", "git://", "git+ssh://")


def is_remote_location(location: str) -> bool:
    """Check whether a package location points at a remote repository.

    Args:
        location: URL or file-system path from a manifest.

    Returns:
        True for http(s), ssh, git and scp-like locations, False for
        local paths and file:// URLs.
    """
    return location.startswith(REMOTE_SCHEMES) or bool(
        SCP_LOCATION_PATTERN.match(location)
    )


def _location_parts(location: str) -> list[str]:
    path = location.strip().rstrip("/")
    if path.endswith(".git"):
        path = path[:-4]
    if SCP_LOCATION_PATTERN.match(path):
        path = path.split(":", 1)[1]
    return [part for part in path.split("/") if part]


def repository_name(location: str) -> Optional[str]:
    """Return the repository name of a location (last path segment)."""
    parts = _location_parts(location)
    return parts[-1] if parts else None


def repository_owner(location: str) -> Optional[str]:
    """Return the repository owner of a remote location.

    The owner is the second-to-last path segment, so
    ``https://github.com/Alamofire/Alamofire.git`` yields ``Alamofire``.

    Args:
        location: Repository URL.

    Returns:
        Owner name, or None for local paths and URLs without an owner segment.
    """
    if not is_remote_location(location):
        return None
    parts = _location_parts(location)
    if location.startswith(REMOTE_SCHEMES):
        # Drop the scheme and host
        parts = parts[2:]
    if len(parts) < 2:
        return None
    return parts[-2]


class BaseScanner(ABC):
    """Abstract base class for manifest scanners.

    Attributes:
        source_path: Path to the manifest being scanned.
        warnings: Notes about entries skipped by the last scan.
    """

    def __init__(self, source_path: Optional[Path] = None) -> None:
        """Initialize the scanner.

        Args:
            source_path: Path to the manifest file.
        """
        self.source_path = source_path
        self.warnings: list[str] = []

    @abstractmethod
    def scan(self) -> list[Package]:
        """Scan the manifest and extract package declarations.

        Entries without a name are skipped and recorded in ``warnings``.

        Returns:
            List of Package objects in manifest order.

        Raises:
            FileNotFoundError: If the manifest does not exist.
            ManifestError: If the manifest cannot be parsed.
        """
        ...

    @classmethod
    @abstractmethod
    def can_handle(cls, path: Path) -> bool:
        """Check if this scanner can handle the given file.

        Args:
            path: Path to check.

        Returns:
            True if this scanner can process the file, False otherwise.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return a human-readable name for this scanner's manifest type.

        Returns:
            Name like "Package.resolved", "Cartfile.resolved", etc.
        """
        ...

    def _require_source(self) -> Path:
        if self.source_path is None:
            raise ValueError("source_path must be provided")
        if not self.source_path.exists():
            raise FileNotFoundError(f"Manifest not found: {self.source_path}")
        return self.source_path

    def _load_json(self) -> Any:
        path = self._require_source()
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ManifestError(path, f"invalid JSON: {e}") from e

    def _skip(self, message: str) -> None:
        warning = f"{self.source_path}: {message}"
        logger.warning(warning)
        self.warnings.append(warning)

    def _make_package(self, name: str, location: Optional[str]) -> Package:
        remote = isinstance(location, str) and is_remote_location(location)
        return Package(
            name=name,
            author=repository_owner(location) if remote else None,
            url=location if remote else None,
            source=self.source_name,
        )
