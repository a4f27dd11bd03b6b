"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from credits_tracker.exceptions import NotAVersionControlRootError
from credits_tracker.history import BaseHistory

MIT_LICENSE = """MIT License

Copyright (c) 2024 Example

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction.
"""

APACHE_LICENSE = """
                                 Apache License
                           Version 2.0, January 2004
                        http://www.apache.org/licenses/
"""


class FakeHistory(BaseHistory):
    """History source returning canned author names."""

    def __init__(self, authors=None, error=None):
        self.authors = list(authors or [])
        self.error = error
        self.calls = []

    @property
    def name(self) -> str:
        return "fake"

    def list_commit_authors(self, root: Path) -> list[str]:
        self.calls.append(root)
        if self.error is not None:
            raise self.error
        return list(self.authors)


@pytest.fixture
def fake_history():
    """Return a factory for FakeHistory instances."""
    return FakeHistory


@pytest.fixture
def broken_history(tmp_path):
    """History source that behaves like a directory outside any repository."""
    return FakeHistory(error=NotAVersionControlRootError(tmp_path))


def write_package_resolved(directory: Path, pins: list[dict], version: int = 2) -> Path:
    """Write a Package.resolved in the v2 layout (or v1 when version=1)."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "Package.resolved"
    if version == 1:
        data = {"object": {"pins": pins}, "version": 1}
    else:
        data = {"originHash": "abc", "pins": pins, "version": version}
    path.write_text(json.dumps(data, indent=2))
    return path


def write_workspace_state(directory: Path, refs: list[dict]) -> Path:
    """Write a workspace-state.json listing the given packageRefs."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "workspace-state.json"
    data = {
        "object": {
            "artifacts": [],
            "dependencies": [
                {"basedOn": None, "packageRef": ref, "state": {"name": "sourceControlCheckout"}}
                for ref in refs
            ],
        },
        "version": 6,
    }
    path.write_text(json.dumps(data, indent=2))
    return path


def write_checkout(checkouts: Path, name: str, license_text: str) -> Path:
    """Create a package checkout holding a LICENSE file."""
    package_dir = checkouts / name
    package_dir.mkdir(parents=True, exist_ok=True)
    (package_dir / "LICENSE").write_text(license_text)
    return package_dir


@pytest.fixture
def xcode_workspace(tmp_path):
    """Workspace with an Xcode-style SourcePackages folder."""
    source_packages = tmp_path / "SourcePackages"
    write_workspace_state(
        source_packages,
        [
            {
                "identity": "alamofire",
                "kind": "remoteSourceControl",
                "location": "https://github.com/Alamofire/Alamofire.git",
                "name": "Alamofire",
            },
            {
                "identity": "swift-log",
                "kind": "remoteSourceControl",
                "location": "https://github.com/apple/swift-log.git",
                "name": "swift-log",
            },
        ],
    )
    write_checkout(source_packages / "checkouts", "Alamofire", MIT_LICENSE)
    write_checkout(source_packages / "checkouts", "swift-log", APACHE_LICENSE)
    return tmp_path


@pytest.fixture
def package_resolved_writer():
    """Return the Package.resolved writer helper."""
    return write_package_resolved


@pytest.fixture
def workspace_state_writer():
    """Return the workspace-state.json writer helper."""
    return write_workspace_state


@pytest.fixture
def checkout_writer():
    """Return the package checkout writer helper."""
    return write_checkout


@pytest.fixture
def mit_license():
    return MIT_LICENSE
