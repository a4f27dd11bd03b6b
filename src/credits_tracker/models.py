"""Core data models for credits_tracker.

This module defines the data structures shared by the scanners, the
identity merger and the reporters: third-party packages, contributors and
the acknowledgements report that combines them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional


def normalize_name(name: str) -> str:
    """Fold a person's name into the key used for identity matching.

    Trims, lower-cases and collapses internal whitespace runs to one space.

    Args:
        name: Raw author name (e.g., " Jane  DOE ").

    Returns:
        Normalized key (e.g., "jane doe").
    """
    return " ".join(name.split()).lower()


@dataclass(frozen=True)
class Package:
    """Immutable third-party dependency declaration.

    Attributes:
        name: Package name as declared by the manifest (e.g., "Alamofire").
        license: Optional SPDX identifier (e.g., "MIT").
        author: Optional repository owner (e.g., "Alamofire").
        url: Optional source repository URL.
        source: Manifest kind that declared the package (e.g.,
            "Package.resolved"). Not part of the serialized report.
    """

    name: str
    license: Optional[str] = None
    author: Optional[str] = None
    url: Optional[str] = None
    source: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> dict[str, str]:
        """Serialize, omitting optional fields that are absent."""
        data = {"name": self.name}
        for key in ("license", "author", "url"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Package":
        return cls(
            name=data["name"],
            license=data.get("license"),
            author=data.get("author"),
            url=data.get("url"),
        )


@dataclass(frozen=True)
class Contributor:
    """A person credited through version-control history.

    Attributes:
        name: Display name chosen among the merged name variants.
        contributions: Number of commits attributed to this identity.
    """

    name: str
    contributions: int = 1

    @property
    def key(self) -> str:
        """Return the normalized identity key for this contributor."""
        return normalize_name(self.name)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "contributions": self.contributions}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contributor":
        return cls(name=data["name"], contributions=data.get("contributions", 1))


@dataclass(frozen=True)
class AcknowledgementsReport:
    """The combined, deterministically ordered acknowledgements.

    Use :meth:`build` to create a report from unsorted inputs; the
    constructor stores the sequences as given.

    Attributes:
        application: Name of the application being credited.
        packages: Packages sorted case-insensitively by name.
        contributors: Contributors sorted case-insensitively by name.
    """

    application: str
    packages: tuple[Package, ...] = ()
    contributors: tuple[Contributor, ...] = ()

    @classmethod
    def build(
        cls,
        application: str,
        packages: Iterable[Package],
        contributors: Iterable[Contributor],
    ) -> "AcknowledgementsReport":
        """Create a report, sorting packages and contributors by name.

        Sorting is stable, so entries whose names only differ in case keep
        the order in which they were discovered.

        Args:
            application: Application name, must not be blank.
            packages: Packages in discovery order.
            contributors: Contributors in discovery order.

        Returns:
            A new AcknowledgementsReport.

        Raises:
            ValueError: If the application name is blank.
        """
        if not application or not application.strip():
            raise ValueError("Application name must not be empty")

        return cls(
            application=application,
            packages=tuple(sorted(packages, key=lambda p: p.name.lower())),
            contributors=tuple(sorted(contributors, key=lambda c: c.name.lower())),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "application": self.application,
            "packages": [p.to_dict() for p in self.packages],
            "contributors": [c.to_dict() for c in self.contributors],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AcknowledgementsReport":
        return cls(
            application=data["application"],
            packages=tuple(Package.from_dict(p) for p in data.get("packages", [])),
            contributors=tuple(
                Contributor.from_dict(c) for c in data.get("contributors", [])
            ),
        )


@dataclass
class ScanResult:
    """Outcome of scanning a workspace for dependency manifests.

    Attributes:
        packages: Deduplicated packages in discovery order.
        warnings: Human-readable notes about skipped entries or files.
        manifests: Manifest files that were read.
    """

    packages: list[Package] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    manifests: list[Path] = field(default_factory=list)
