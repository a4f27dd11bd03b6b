"""Base interface for output reporters.

Reporters generate formatted output (JSON, Markdown) from an
acknowledgements report and write it to disk.
"""

import logging
import os
import stat
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from credits_tracker.exceptions import WriteError
from credits_tracker.models import AcknowledgementsReport

logger = logging.getLogger(__name__)

DEFAULT_BASENAME = "acknowledgements"


def _file_mode(path: Path) -> int:
    """Return the permission bits ``path`` should end up with.

    An existing file keeps its mode, a new one gets the default mode under
    the current umask.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class BaseReporter(ABC):
    """Abstract base class for output reporters.

    Reporters take an acknowledgements report and generate a formatted
    output document.
    """

    @abstractmethod
    def render(self, report: AcknowledgementsReport) -> str:
        """Render a report to formatted output.

        Args:
            report: The acknowledgements report.

        Returns:
            Rendered output as a string.

        Raises:
            SerializationError: If the report cannot be encoded.
        """
        ...

    def output_path(self, output: Path) -> Path:
        """Resolve the file a report should be written to.

        Args:
            output: File path, or an existing directory.

        Returns:
            ``output / "acknowledgements<ext>"`` when ``output`` is a
            directory, otherwise ``output`` itself.
        """
        if output.is_dir():
            return output / f"{DEFAULT_BASENAME}{self.default_extension}"
        return output

    def write(self, report: AcknowledgementsReport, output_path: Path) -> None:
        """Render and atomically write output to a file.

        The output is rendered completely before anything touches the disk,
        written to a temporary file next to ``output_path`` and then moved
        into place, so an existing file is either fully replaced or left
        untouched.

        Args:
            report: The acknowledgements report.
            output_path: Path to write the output file.

        Raises:
            SerializationError: If the report cannot be encoded.
            WriteError: If the file cannot be written.
        """
        content = self.render(report)
        directory = output_path.parent

        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{output_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                f.write(content)
            os.chmod(tmp_path, _file_mode(output_path))
            os.replace(tmp_path, output_path)
        except OSError as e:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise WriteError(output_path, e) from e

        logger.debug(f"Wrote {len(content)} characters to {output_path}")

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the output format name.

        Returns:
            Format name like "json" or "markdown".
        """
        ...

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Return the default file extension for this format.

        Returns:
            Extension like ".json" or ".md".
        """
        ...
