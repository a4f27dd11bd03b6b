"""Output reporters for acknowledgements documents.

This module provides reporters for rendering an acknowledgements report to
JSON (the file apps bundle) and Markdown.
"""

from credits_tracker.reporters.base import BaseReporter
from credits_tracker.reporters.json import JSONReporter
from credits_tracker.reporters.markdown import MarkdownReporter

__all__ = ["BaseReporter", "JSONReporter", "MarkdownReporter", "get_reporter"]

_REPORTERS: dict[str, type[BaseReporter]] = {
    "json": JSONReporter,
    "markdown": MarkdownReporter,
}


def get_reporter(format_name: str, **kwargs) -> BaseReporter:
    """Get a reporter instance by output format name.

    Args:
        format_name: "json" or "markdown".
        **kwargs: Passed to the reporter constructor.

    Returns:
        Reporter instance.

    Raises:
        ValueError: If the format is not supported.
    """
    try:
        reporter_cls = _REPORTERS[format_name]
    except KeyError:
        raise ValueError(
            f"Unsupported format '{format_name}'. "
            f"Supported formats: {', '.join(_REPORTERS)}"
        ) from None
    return reporter_cls(**kwargs)
