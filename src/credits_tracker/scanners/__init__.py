"""Dependency scanners for Swift Package Manager and Carthage manifests.

This module provides scanners for extracting package declarations from
the manifests an Apple-platform project leaves in its workspace.
"""

from pathlib import Path

from credits_tracker.scanners.base import BaseScanner
from credits_tracker.scanners.cartfile import CartfileResolvedScanner
from credits_tracker.scanners.package_resolved import PackageResolvedScanner
from credits_tracker.scanners.workspace_state import WorkspaceStateScanner

__all__ = [
    "BaseScanner",
    "CartfileResolvedScanner",
    "PackageResolvedScanner",
    "WorkspaceStateScanner",
    "get_scanner",
    "scanner_priority",
]

# Registry of available scanners in priority order
_SCANNERS: list[type[BaseScanner]] = [
    WorkspaceStateScanner,
    PackageResolvedScanner,
    CartfileResolvedScanner,
]


def scanner_priority(path: Path) -> int:
    """Return the registry position of the scanner for a file.

    Args:
        path: Path to a manifest.

    Returns:
        Index into the registry (lower is read first), or -1 if no
        scanner handles the file.
    """
    for index, scanner_cls in enumerate(_SCANNERS):
        if scanner_cls.can_handle(path):
            return index
    return -1


def get_scanner(path: Path) -> BaseScanner:
    """Get the appropriate scanner for a given file path.

    Auto-detects the manifest type based on filename and returns the
    appropriate scanner instance.

    Args:
        path: Path to the manifest file.

    Returns:
        Scanner instance configured for the given file.

    Raises:
        ValueError: If no scanner can handle the given file.
    """
    for scanner_cls in _SCANNERS:
        if scanner_cls.can_handle(path):
            return scanner_cls(path)

    raise ValueError(
        f"No scanner available for '{path.name}'. "
        f"Supported files: workspace-state.json, Package.resolved, Cartfile.resolved"
    )
