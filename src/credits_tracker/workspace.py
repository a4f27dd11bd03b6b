"""Workspace-wide manifest scanning.

Walks a workspace, runs the matching scanner on every manifest it finds and
merges the results into one deduplicated package list with licenses
attached from the package checkouts.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from credits_tracker.exceptions import ManifestError, PathNotFoundError
from credits_tracker.licenses import attach_licenses, find_checkout_dirs
from credits_tracker.models import Package, ScanResult
from credits_tracker.scanners import get_scanner, scanner_priority

logger = logging.getLogger(__name__)

# Directories holding dependency sources or VCS data rather than the
# workspace's own manifests
IGNORED_DIRS = {".git", "checkouts", "Checkouts", "repositories", "node_modules"}


def find_manifests(root: Path) -> list[Path]:
    """Find every supported manifest under a root, in scan order.

    Directories are walked in sorted order. Within a directory, manifests
    are ordered by scanner priority.

    Args:
        root: Directory to search.

    Returns:
        List of manifest paths.
    """
    manifests = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
        found = [
            Path(dirpath) / name
            for name in filenames
            if scanner_priority(Path(name)) >= 0
        ]
        found.sort(key=lambda p: (scanner_priority(p), p.name))
        manifests.extend(found)
    return manifests


def scan_workspace(
    root: Path, checkout_dirs: Optional[Iterable[Path]] = None
) -> ScanResult:
    """Scan a workspace for third-party package declarations.

    Packages are deduplicated by exact (case-sensitive) name; the first
    declaration found wins. Manifests that cannot be read or parsed are
    skipped with a warning.

    Args:
        root: Workspace or packages directory to scan.
        checkout_dirs: Directories holding package checkouts to detect
            licenses from. Defaults to those found under ``root``.

    Returns:
        ScanResult with packages in discovery order.

    Raises:
        PathNotFoundError: If ``root`` is not an existing directory.
    """
    if not root.is_dir():
        raise PathNotFoundError(root)

    result = ScanResult()
    seen: set[str] = set()

    for manifest in find_manifests(root):
        scanner = get_scanner(manifest)
        logger.debug(f"Scanning {manifest} with {scanner.source_name} scanner")
        try:
            packages = scanner.scan()
        except (ManifestError, OSError, UnicodeDecodeError) as e:
            warning = f"Skipping {manifest}: {e}"
            logger.warning(warning)
            result.warnings.append(warning)
            continue

        result.manifests.append(manifest)
        result.warnings.extend(scanner.warnings)

        for package in packages:
            if package.name in seen:
                logger.debug(f"Ignoring duplicate {package.name} from {manifest}")
                continue
            seen.add(package.name)
            result.packages.append(package)

    if checkout_dirs is None:
        checkout_dirs = find_checkout_dirs(root)
    result.packages = attach_licenses(result.packages, checkout_dirs)

    logger.debug(
        f"Found {len(result.packages)} packages in {len(result.manifests)} manifests"
    )
    return result


def summarize(packages: Iterable[Package]) -> dict[str, int]:
    """Count packages per manifest kind."""
    counts: dict[str, int] = {}
    for package in packages:
        key = package.source or "unknown"
        counts[key] = counts.get(key, 0) + 1
    return counts
