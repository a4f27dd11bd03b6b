"""License detection for checked-out package sources.

Swift Package Manager keeps package sources in ``checkouts`` directories
(``SourcePackages/checkouts`` for Xcode, ``.build/checkouts`` for the
command-line tools) and Carthage in ``Carthage/Checkouts``. The license file
of each checkout is read and matched against well-known license texts to
find its SPDX identifier.
"""

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

from credits_tracker.models import Package

logger = logging.getLogger(__name__)

CHECKOUT_DIR_NAMES = {"checkouts", "Checkouts"}

# Signature phrases per SPDX identifier, checked in order. More specific
# licenses come before the ones whose text they contain (LGPL before GPL,
# BSD-3-Clause before BSD-2-Clause).
LICENSE_SIGNATURES: list[tuple[str, tuple[str, ...]]] = [
    ("AGPL-3.0-only", ("gnu affero general public license version 3",)),
    ("LGPL-3.0-only", ("gnu lesser general public license version 3",)),
    ("LGPL-2.1-only", ("gnu lesser general public license version 2.1",)),
    ("GPL-3.0-only", ("gnu general public license version 3",)),
    ("GPL-2.0-only", ("gnu general public license version 2",)),
    ("MPL-2.0", ("mozilla public license version 2.0",)),
    ("Apache-2.0", ("apache license", "version 2.0")),
    ("BSL-1.0", ("boost software license",)),
    ("Unlicense", ("this is free and unencumbered software",)),
    ("CC0-1.0", ("cc0 1.0 universal",)),
    ("Zlib", ("this software is provided 'as-is'", "altered source versions")),
    (
        "ISC",
        ("permission to use, copy, modify, and/or distribute this software",),
    ),
    (
        "BSD-3-Clause",
        ("redistributions in binary form", "neither the name"),
    ),
    ("BSD-2-Clause", ("redistributions in binary form",)),
    ("MIT", ("permission is hereby granted, free of charge",)),
]


def identify_license(text: str) -> Optional[str]:
    """Identify the SPDX license of a license file's text.

    Args:
        text: Contents of a LICENSE file.

    Returns:
        SPDX identifier (e.g., "MIT", "Apache-2.0"), or None if the text
        matches no known license.
    """
    folded = " ".join(text.split()).lower()
    for spdx_id, phrases in LICENSE_SIGNATURES:
        if all(phrase in folded for phrase in phrases):
            return spdx_id
    return None


def find_checkout_dirs(root: Path) -> list[Path]:
    """Find all package checkout directories under a root.

    Args:
        root: Directory to search (workspace or SourcePackages folder).

    Returns:
        Sorted list of ``checkouts`` / ``Carthage/Checkouts`` directories.
    """
    found = []
    for dirpath, dirnames, _ in os.walk(root):
        dirnames.sort()
        if ".git" in dirnames:
            dirnames.remove(".git")
        for dirname in list(dirnames):
            if dirname in CHECKOUT_DIR_NAMES:
                found.append(Path(dirpath) / dirname)
                # Nested checkouts belong to dependencies of dependencies
                dirnames.remove(dirname)
    return found


def find_license_file(package_dir: Path) -> Optional[Path]:
    """Return the first file in a checkout whose name mentions "license"."""
    try:
        candidates = sorted(package_dir.iterdir())
    except OSError as e:
        logger.warning(f"Cannot list {package_dir}: {e}")
        return None

    for candidate in candidates:
        if "license" in candidate.name.lower() and candidate.is_file():
            return candidate
    return None


def _find_package_dir(name: str, checkout_dirs: Iterable[Path]) -> Optional[Path]:
    checkout_dirs = list(checkout_dirs)
    for checkout_dir in checkout_dirs:
        candidate = checkout_dir / name
        if candidate.is_dir():
            return candidate

    folded = name.lower()
    for checkout_dir in checkout_dirs:
        try:
            candidates = sorted(checkout_dir.iterdir())
        except OSError as e:
            logger.warning(f"Cannot list {checkout_dir}: {e}")
            continue
        for candidate in candidates:
            if candidate.is_dir() and candidate.name.lower() == folded:
                return candidate
    return None


def detect_license(name: str, checkout_dirs: Iterable[Path]) -> Optional[str]:
    """Detect the license of a package from its checkout.

    Args:
        name: Package name, matched against checkout directory names
            exactly first and case-insensitively second.
        checkout_dirs: Checkout directories to look in.

    Returns:
        SPDX identifier, or None if there is no checkout, no license file,
        or the license text is not recognized.
    """
    package_dir = _find_package_dir(name, checkout_dirs)
    if package_dir is None:
        logger.debug(f"No checkout found for {name}")
        return None

    license_file = find_license_file(package_dir)
    if license_file is None:
        logger.debug(f"No license file in {package_dir}")
        return None

    try:
        text = license_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Cannot read {license_file}: {e}")
        return None

    spdx_id = identify_license(text)
    if spdx_id is None:
        logger.debug(f"Unrecognized license text in {license_file}")
    return spdx_id


def attach_licenses(
    packages: Iterable[Package], checkout_dirs: Iterable[Path]
) -> list[Package]:
    """Return copies of packages with detected licenses filled in.

    Packages that already carry a license are returned unchanged.
    """
    checkout_dirs = list(checkout_dirs)
    result = []
    for package in packages:
        if package.license is None and checkout_dirs:
            spdx_id = detect_license(package.name, checkout_dirs)
            if spdx_id:
                package = replace(package, license=spdx_id)
        result.append(package)
    return result
