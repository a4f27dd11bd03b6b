"""Locate an app's Xcode DerivedData folder.

Xcode resolves Swift packages into
``<DerivedData>/<App>-<hash>/SourcePackages`` rather than the project
directory, so generating acknowledgements for an Xcode app means finding
that folder first.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from credits_tracker.exceptions import PathNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_DERIVED_DATA = Path("~/Library/Developer/Xcode/DerivedData")


def custom_derived_data_location() -> Optional[Path]:
    """Read the user's custom DerivedData location from Xcode's defaults.

    Returns:
        The configured location, or None when none is set or the
        ``defaults`` tool is not available (non-macOS hosts).
    """
    try:
        result = subprocess.run(
            ["defaults", "read", "com.apple.dt.Xcode", "IDECustomDerivedDataLocation"],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        logger.debug(f"Cannot read Xcode defaults: {e}")
        return None

    location = result.stdout.strip()
    if result.returncode != 0 or not location:
        return None
    return Path(location).expanduser()


def derived_data_base(override: Optional[Path] = None) -> Path:
    """Return the DerivedData directory to search.

    Args:
        override: Explicit location, takes precedence over Xcode settings.

    Returns:
        The override, the custom location set in Xcode, or the default
        ``~/Library/Developer/Xcode/DerivedData``.
    """
    if override is not None:
        return override.expanduser()
    return custom_derived_data_location() or DEFAULT_DERIVED_DATA.expanduser()


def find_derived_data(app_name: str, base: Path) -> Path:
    """Find the most recently modified DerivedData folder of an app.

    Args:
        app_name: Xcode project or workspace name.
        base: DerivedData directory to search.

    Returns:
        Path of the newest ``<base>/<app_name>-*`` directory.

    Raises:
        PathNotFoundError: If no matching directory exists.
    """
    candidates = [p for p in base.glob(f"{app_name}-*") if p.is_dir()]
    if not candidates:
        raise PathNotFoundError(
            base / f"{app_name}-*",
            hint="Build the project in Xcode at least once",
        )

    candidates.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    logger.debug(f"Using DerivedData folder {candidates[0]}")
    return candidates[0]


def source_packages_dir(app_name: str, base: Optional[Path] = None) -> Path:
    """Return the SourcePackages folder of an app's DerivedData."""
    return find_derived_data(app_name, derived_data_base(base)) / "SourcePackages"
