"""Markdown reporter for acknowledgements documents.

This module provides a reporter that renders acknowledgements as Markdown
using Jinja2 templates, for READMEs or documentation sites.
"""

from importlib.resources import files
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, Template, TemplateError

from credits_tracker.exceptions import ConfigError, SerializationError
from credits_tracker.models import AcknowledgementsReport
from credits_tracker.reporters.base import BaseReporter


class MarkdownReporter(BaseReporter):
    """Reporter that generates Markdown acknowledgements files.

    Values are HTML-escaped since Markdown renderers pass inline HTML
    through.

    Attributes:
        template: The Jinja2 template to use for rendering.
    """

    def __init__(self, template_path: Optional[Path] = None) -> None:
        """Initialize the Markdown reporter.

        Args:
            template_path: Optional path to a custom Jinja2 template.
                If not provided, uses the default bundled template.

        Raises:
            ConfigError: If the custom template cannot be loaded.
        """
        if template_path:
            env = Environment(
                loader=FileSystemLoader(template_path.parent),
                autoescape=True,
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
            )
            try:
                self.template = env.get_template(template_path.name)
            except TemplateError as e:
                raise ConfigError(
                    f"Cannot load template {template_path}: {e}", path=template_path
                ) from e
        else:
            self.template = self._load_default_template()

    def _load_default_template(self) -> Template:
        """Load the default bundled Jinja2 template.

        Returns:
            The default template loaded from package resources.
        """
        template_content = (
            files("credits_tracker.templates")
            .joinpath("acknowledgements.md.j2")
            .read_text(encoding="utf-8")
        )
        env = Environment(
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        return env.from_string(template_content)

    def render(self, report: AcknowledgementsReport) -> str:
        """Render the report to Markdown.

        The template receives ``application``, ``packages`` and
        ``contributors``.

        Returns:
            Rendered Markdown document as a string.

        Raises:
            SerializationError: If the template fails to render.
        """
        try:
            return self.template.render(
                application=report.application,
                packages=report.packages,
                contributors=report.contributors,
            )
        except TemplateError as e:
            raise SerializationError(f"Failed to render Markdown: {e}") from e

    @property
    def format_name(self) -> str:
        return "markdown"

    @property
    def default_extension(self) -> str:
        return ".md"
