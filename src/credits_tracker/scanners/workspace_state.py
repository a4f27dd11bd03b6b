"""Scanner for Swift Package Manager workspace-state.json files.

Xcode keeps this file in ``DerivedData/<App>-<hash>/SourcePackages/`` and
the ``swift`` command-line tools keep it in ``.build/``. It lists every
resolved dependency of the workspace, transitive ones included.
"""

from pathlib import Path

from credits_tracker.exceptions import ManifestError
from credits_tracker.models import Package
from credits_tracker.scanners.base import BaseScanner


class WorkspaceStateScanner(BaseScanner):
    """Scanner for SwiftPM workspace-state.json files.

    Example workspace-state.json structure::

        {
            "object": {
                "dependencies": [
                    {
                        "packageRef": {
                            "identity": "alamofire",
                            "kind": "remoteSourceControl",
                            "location": "https://github.com/Alamofire/Alamofire.git",
                            "name": "Alamofire"
                        },
                        "state": {...}
                    }
                ]
            },
            "version": 6
        }
    """

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        return path.name == "workspace-state.json"

    @property
    def source_name(self) -> str:
        return "workspace-state.json"

    def scan(self) -> list[Package]:
        """Extract one package per ``object.dependencies`` entry.

        Returns:
            List of Package objects named after ``packageRef.name``.

        Raises:
            FileNotFoundError: If the file does not exist.
            ManifestError: If the JSON is invalid or has no dependency list.
        """
        data = self._load_json()
        self.warnings = []

        try:
            dependencies = data["object"]["dependencies"]
        except (KeyError, TypeError) as e:
            raise ManifestError(
                self.source_path, "missing object.dependencies"
            ) from e
        if not isinstance(dependencies, list):
            raise ManifestError(self.source_path, "object.dependencies is not a list")

        packages = []
        for index, dependency in enumerate(dependencies):
            ref = dependency.get("packageRef") if isinstance(dependency, dict) else None
            if not isinstance(ref, dict):
                self._skip(f"dependency #{index} has no packageRef")
                continue

            name = ref.get("name")
            if not isinstance(name, str) or not name.strip():
                self._skip(f"dependency #{index} has no name")
                continue

            packages.append(self._make_package(name.strip(), ref.get("location")))

        return packages
