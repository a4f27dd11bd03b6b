"""Scanner for Carthage Cartfile.resolved files.

Each non-comment line pins one dependency::

    github "Alamofire/Alamofire" "5.8.1"
    git "https://gitlab.com/group/Library.git" "v1.2.0"
    binary "https://example.com/Framework.json" "2.0.0"
"""

import logging
import re
from pathlib import Path
from typing import Optional

from credits_tracker.models import Package
from credits_tracker.scanners.base import BaseScanner, repository_name

logger = logging.getLogger(__name__)


class CartfileResolvedScanner(BaseScanner):
    """Scanner for Cartfile.resolved files."""

    LINE_PATTERN = re.compile(r'^(github|git|binary)\s+"([^"]+)"(?:\s+"([^"]*)")?')

    @classmethod
    def can_handle(cls, path: Path) -> bool:
        return path.name == "Cartfile.resolved"

    @property
    def source_name(self) -> str:
        return "Cartfile.resolved"

    def scan(self) -> list[Package]:
        """Scan Cartfile.resolved line by line.

        Lines that do not match the ``<kind> "<source>" "<version>"`` format
        are skipped and recorded as warnings.

        Returns:
            List of Package objects in file order.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = self._require_source()
        self.warnings = []
        packages = []

        with open(path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()

                if not line or line.startswith("#"):
                    continue

                match = self.LINE_PATTERN.match(line)
                if not match:
                    self._skip(f"unrecognized line {line_num}: {line[:50]}")
                    continue

                kind, origin = match.group(1), match.group(2)
                location = self._location(kind, origin)
                name = repository_name(origin)
                if kind == "binary" and name and name.endswith(".json"):
                    name = name[: -len(".json")]

                if not name:
                    self._skip(f"line {line_num} has no package name")
                    continue

                logger.debug(f"Found {kind} dependency {name} on line {line_num}")
                packages.append(self._make_package(name, location))

        return packages

    def _location(self, kind: str, origin: str) -> Optional[str]:
        if kind == "github" and "://" not in origin:
            return f"https://github.com/{origin.strip('/')}"
        return origin
