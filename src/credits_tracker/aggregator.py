"""Acknowledgements aggregation.

Runs the whole pipeline: scan manifests, read commit authors, merge them
into contributors, build the sorted report and write it out. Every phase
receives the workspace root explicitly.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional

from credits_tracker.exceptions import (
    HistoryUnavailableError,
    NotAVersionControlRootError,
    PathNotFoundError,
)
from credits_tracker.history import BaseHistory, GitHistory
from credits_tracker.merger import merge_contributors
from credits_tracker.models import AcknowledgementsReport, Contributor, ScanResult
from credits_tracker.reporters import BaseReporter, JSONReporter
from credits_tracker.workspace import scan_workspace

logger = logging.getLogger(__name__)


def collect_contributors(
    workspace: Path,
    history: Optional[BaseHistory] = None,
    aliases: Optional[Mapping[str, str]] = None,
    allow_missing_history: bool = False,
) -> list[Contributor]:
    """Read commit authors of a workspace and merge them into contributors.

    Args:
        workspace: Workspace root.
        history: History source, defaults to GitHistory.
        aliases: Author aliases applied before merging.
        allow_missing_history: Return an empty list with a warning instead
            of raising when the history cannot be read.

    Returns:
        Contributors in discovery order.

    Raises:
        NotAVersionControlRootError: If ``workspace`` is not a repository.
        HistoryUnavailableError: If the history cannot be read.
    """
    history = history or GitHistory()
    try:
        raw_names = history.list_commit_authors(workspace)
    except (NotAVersionControlRootError, HistoryUnavailableError) as e:
        if not allow_missing_history:
            raise
        logger.warning(f"{e}; continuing without contributors")
        return []

    logger.debug(f"Read {len(raw_names)} commits from {history.name} history")
    return merge_contributors(raw_names, aliases)


def build_report(
    app_name: str,
    workspace: Path,
    history: Optional[BaseHistory] = None,
    packages_root: Optional[Path] = None,
    aliases: Optional[Mapping[str, str]] = None,
    allow_missing_history: bool = False,
) -> tuple[AcknowledgementsReport, ScanResult]:
    """Build the acknowledgements report of a workspace.

    Args:
        app_name: Application name, must not be blank.
        workspace: Workspace root holding the git history (and, unless
            ``packages_root`` is given, the manifests).
        history: History source, defaults to GitHistory.
        packages_root: Directory to scan for manifests instead of the
            workspace, e.g. an Xcode ``SourcePackages`` folder.
        aliases: Author aliases applied before merging.
        allow_missing_history: Degrade to no contributors instead of failing
            when the history cannot be read.

    Returns:
        Tuple of (report, manifest scan result).

    Raises:
        ValueError: If ``app_name`` is blank.
        PathNotFoundError: If the workspace or packages root is missing.
        NotAVersionControlRootError: If the workspace is not a repository.
        HistoryUnavailableError: If the history cannot be read.
    """
    if not app_name or not app_name.strip():
        raise ValueError("Application name must not be empty")
    if not workspace.is_dir():
        raise PathNotFoundError(workspace)

    scan = scan_workspace(packages_root or workspace)
    contributors = collect_contributors(
        workspace,
        history=history,
        aliases=aliases,
        allow_missing_history=allow_missing_history,
    )

    report = AcknowledgementsReport.build(app_name, scan.packages, contributors)
    return report, scan


def generate(
    app_name: str,
    workspace: Path,
    output: Path,
    reporter: Optional[BaseReporter] = None,
    history: Optional[BaseHistory] = None,
    packages_root: Optional[Path] = None,
    aliases: Optional[Mapping[str, str]] = None,
    allow_missing_history: bool = False,
) -> Path:
    """Build the acknowledgements report and write it to disk.

    Nothing is written when any phase before the write fails.

    Args:
        app_name: Application name.
        workspace: Workspace root.
        output: Output file, or an existing directory to create
            ``acknowledgements.json`` (or ``.md``) in.
        reporter: Output reporter, defaults to JSONReporter.
        history: History source, defaults to GitHistory.
        packages_root: Directory to scan for manifests instead of the workspace.
        aliases: Author aliases applied before merging.
        allow_missing_history: Degrade to no contributors instead of failing.

    Returns:
        Path of the written file.

    Raises:
        CreditsTrackerError: On any fatal error (see :func:`build_report`),
            and SerializationError or WriteError from the write.
    """
    reporter = reporter or JSONReporter()
    report, _ = build_report(
        app_name,
        workspace,
        history=history,
        packages_root=packages_root,
        aliases=aliases,
        allow_missing_history=allow_missing_history,
    )

    output_path = reporter.output_path(output)
    reporter.write(report, output_path)
    logger.debug(
        f"Wrote {len(report.packages)} packages and "
        f"{len(report.contributors)} contributors to {output_path}"
    )
    return output_path
