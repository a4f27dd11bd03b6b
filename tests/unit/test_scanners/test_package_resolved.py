"""Unit tests for PackageResolvedScanner."""

import logging
from pathlib import Path

import pytest

from credits_tracker.exceptions import ManifestError
from credits_tracker.models import Package
from credits_tracker.scanners.package_resolved import PackageResolvedScanner


def test_can_handle_package_resolved():
    assert PackageResolvedScanner.can_handle(Path("Package.resolved"))
    assert PackageResolvedScanner.can_handle(
        Path("App.xcodeproj/project.xcworkspace/xcshareddata/swiftpm/Package.resolved")
    )


def test_can_handle_other_files():
    assert not PackageResolvedScanner.can_handle(Path("Package.swift"))
    assert not PackageResolvedScanner.can_handle(Path("package.resolved"))
    assert not PackageResolvedScanner.can_handle(Path("workspace-state.json"))


def test_source_name():
    assert PackageResolvedScanner().source_name == "Package.resolved"


def test_scan_v2_uses_repository_name(tmp_path, package_resolved_writer):
    """Test that v2 pins are named after their repository, not the identity."""
    path = package_resolved_writer(
        tmp_path,
        [
            {
                "identity": "alamofire",
                "kind": "remoteSourceControl",
                "location": "https://github.com/Alamofire/Alamofire.git",
                "state": {"revision": "abc", "version": "5.8.1"},
            },
            {
                "identity": "swift-collections",
                "kind": "remoteSourceControl",
                "location": "git@github.com:apple/swift-collections.git",
                "state": {"revision": "def", "version": "1.1.0"},
            },
        ],
    )

    packages = PackageResolvedScanner(path).scan()

    assert packages == [
        Package(
            name="Alamofire",
            author="Alamofire",
            url="https://github.com/Alamofire/Alamofire.git",
        ),
        Package(
            name="swift-collections",
            author="apple",
            url="git@github.com:apple/swift-collections.git",
        ),
    ]
    assert all(p.source == "Package.resolved" for p in packages)


def test_scan_v1_layout(tmp_path, package_resolved_writer):
    path = package_resolved_writer(
        tmp_path,
        [
            {
                "package": "KeychainAccess",
                "repositoryURL": "https://github.com/kishikawakatsumi/KeychainAccess",
                "state": {"branch": None, "revision": "abc", "version": "4.2.2"},
            }
        ],
        version=1,
    )

    packages = PackageResolvedScanner(path).scan()

    assert packages == [
        Package(
            name="KeychainAccess",
            author="kishikawakatsumi",
            url="https://github.com/kishikawakatsumi/KeychainAccess",
        )
    ]


def test_scan_falls_back_to_identity(tmp_path, package_resolved_writer):
    path = package_resolved_writer(tmp_path, [{"identity": "localkit", "kind": "fileSystem"}])

    assert PackageResolvedScanner(path).scan() == [Package(name="localkit")]


def test_scan_local_location_has_no_url_or_author(tmp_path, package_resolved_writer):
    path = package_resolved_writer(
        tmp_path,
        [{"identity": "shared", "kind": "localSourceControl", "location": "/Users/me/Shared"}],
    )

    package = PackageResolvedScanner(path).scan()[0]

    assert package.name == "Shared"
    assert package.url is None
    assert package.author is None


def test_scan_skips_pins_without_name(tmp_path, package_resolved_writer, caplog):
    """Test that malformed pins are skipped with a warning."""
    path = package_resolved_writer(
        tmp_path,
        [
            {"kind": "remoteSourceControl"},
            "not-a-pin",
            {"identity": "ok", "location": "https://github.com/owner/OK.git"},
        ],
    )
    scanner = PackageResolvedScanner(path)

    with caplog.at_level(logging.WARNING):
        packages = scanner.scan()

    assert [p.name for p in packages] == ["OK"]
    assert len(scanner.warnings) == 2
    assert "pin #0" in caplog.text


def test_scan_invalid_json(tmp_path):
    path = tmp_path / "Package.resolved"
    path.write_text("{not json")

    with pytest.raises(ManifestError, match="invalid JSON"):
        PackageResolvedScanner(path).scan()


def test_scan_without_pins(tmp_path):
    path = tmp_path / "Package.resolved"
    path.write_text('{"version": 2}')

    with pytest.raises(ManifestError, match="pins"):
        PackageResolvedScanner(path).scan()


def test_scan_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PackageResolvedScanner(tmp_path / "Package.resolved").scan()
