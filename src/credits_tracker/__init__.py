"""Credits Tracker - Acknowledgements generator for Apple-platform apps.

This package scans Swift Package Manager and Carthage manifests for
third-party packages, merges commit authors from git history into
contributors, and writes both to an acknowledgements file.
"""

__version__ = "0.1.0"
__author__ = "forkrul"

from credits_tracker.aggregator import build_report, generate
from credits_tracker.models import (
    AcknowledgementsReport,
    Contributor,
    Package,
    ScanResult,
)

__all__ = [
    "__version__",
    "AcknowledgementsReport",
    "Contributor",
    "Package",
    "ScanResult",
    "build_report",
    "generate",
]
