"""Scanner for Swift Package Manager Package.resolved files.

Handles both the legacy version 1 layout (pins nested under ``object``,
keyed by ``package`` and ``repositoryURL``) and the version 2/3 layout
(top-level pins keyed by ``identity`` and ``location``).
"""

from pathlib import Path
from typing import Any, Optional

from credits_tracker.exceptions import ManifestError
from credits_tracker.models import Package
from credits_tracker.scanners.base import BaseScanner, repository_name


class PackageResolvedScanner(BaseScanner):
    """Scanner for Package.resolved lock files.

    Version 2 and later only record a lower-cased ``identity`` per pin, so
    the package name is taken from the repository name in ``location`` when
    there is one ("https://github.com/Alamofire/Alamofire.git" gives
    "Alamofire") and falls back to the identity otherwise.
    """

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        return path.name == "Package.resolved"

    @property
    def source_name(self) -> str:
        return "Package.resolved"

    def scan(self) -> list[Package]:
        """Scan Package.resolved and extract one package per pin.

        Returns:
            List of Package objects in pin order.

        Raises:
            FileNotFoundError: If the file does not exist.
            ManifestError: If the JSON is invalid or no pin list is present.
        """
        data = self._load_json()
        self.warnings = []

        if not isinstance(data, dict):
            raise ManifestError(self.source_path, "top level is not an object")

        if data.get("version", 1) == 1 and isinstance(data.get("object"), dict):
            pins = data["object"].get("pins")
            legacy = True
        else:
            pins = data.get("pins")
            legacy = False

        if not isinstance(pins, list):
            raise ManifestError(self.source_path, "missing pins list")

        packages = []
        for index, pin in enumerate(pins):
            if not isinstance(pin, dict):
                self._skip(f"pin #{index} is not an object")
                continue

            if legacy:
                name = pin.get("package")
                location = pin.get("repositoryURL")
            else:
                location = pin.get("location")
                name = self._name_from_pin(pin.get("identity"), location)

            if not isinstance(name, str) or not name.strip():
                self._skip(f"pin #{index} has no package name")
                continue

            packages.append(self._make_package(name.strip(), location))

        return packages

    def _name_from_pin(self, identity: Any, location: Any) -> Optional[str]:
        if isinstance(location, str) and location.strip():
            name = repository_name(location)
            if name:
                return name
        return identity if isinstance(identity, str) else None
