"""JSON reporter for acknowledgements files.

Produces the ``acknowledgements.json`` document apps bundle and read at
runtime to show their credits screen.
"""

import json

from credits_tracker.exceptions import SerializationError
from credits_tracker.models import AcknowledgementsReport
from credits_tracker.reporters.base import BaseReporter


class JSONReporter(BaseReporter):
    """Reporter that serializes a report as pretty-printed JSON.

    Attributes:
        indent: Indentation width of the output.
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def render(self, report: AcknowledgementsReport) -> str:
        """Encode the report as JSON.

        Optional package fields that are absent are omitted rather than
        written as null.

        Returns:
            JSON document terminated by a newline.

        Raises:
            SerializationError: If the report holds values JSON cannot encode.
        """
        try:
            return (
                json.dumps(report.to_dict(), indent=self.indent, ensure_ascii=False)
                + "\n"
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to encode acknowledgements: {e}") from e

    @property
    def format_name(self) -> str:
        return "json"

    @property
    def default_extension(self) -> str:
        return ".json"
