"""Command-line interface for credits_tracker.

Provides the main entry point and subcommands for generating an
acknowledgements file and inspecting the packages and contributors that
go into it.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from credits_tracker.aggregator import build_report, collect_contributors
from credits_tracker.config import Settings, load_settings, parse_alias
from credits_tracker.derived_data import source_packages_dir
from credits_tracker.exceptions import CreditsTrackerError
from credits_tracker.reporters import get_reporter
from credits_tracker.workspace import scan_workspace, summarize

app = typer.Typer(
    name="credits-tracker",
    help="Generate acknowledgements for app dependencies and contributors.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
)
logger = logging.getLogger("credits_tracker")


class OutputFormat(str, Enum):
    json = "json"
    markdown = "markdown"


def _setup_logging(verbose: bool) -> None:
    """Configure logging level based on verbosity flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.getLogger("credits_tracker").setLevel(level)


def _fail(error: Exception) -> typer.Exit:
    """Print an error (and its remediation hint) to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False)
    hint = getattr(error, "hint", None)
    if hint:
        err_console.print(f"[dim]Hint: {escape(hint)}[/dim]", highlight=False)
    return typer.Exit(code=1)


def _resolve_packages_root(
    settings: Settings,
    app_name: Optional[str],
    packages_dir: Optional[Path],
    derived_data: bool,
    derived_data_path: Optional[Path],
) -> Optional[Path]:
    if packages_dir is not None:
        return packages_dir
    if derived_data:
        if not app_name:
            raise typer.BadParameter("--derived-data requires --app-name")
        return source_packages_dir(app_name, derived_data_path)
    return settings.packages_dir


WorkspaceOption = Annotated[
    Path,
    typer.Option(
        "--workspace",
        "-w",
        help="Project root holding the git history and manifests",
        file_okay=False,
    ),
]
PackagesDirOption = Annotated[
    Optional[Path],
    typer.Option(
        "--packages-dir",
        help="Directory to scan for manifests instead of the workspace",
        file_okay=False,
    ),
]
DerivedDataOption = Annotated[
    bool,
    typer.Option(
        "--derived-data",
        help="Scan the app's Xcode DerivedData SourcePackages folder",
    ),
]
DerivedDataPathOption = Annotated[
    Optional[Path],
    typer.Option(
        "--derived-data-path",
        envvar="CREDITS_TRACKER_DERIVED_DATA",
        help="DerivedData location (defaults to Xcode's setting)",
        file_okay=False,
    ),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="Config file (defaults to .credits-tracker.toml in the workspace)",
        dir_okay=False,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose output",
    ),
]


@app.command()
def gen(
    app_name: Annotated[
        Optional[str],
        typer.Option(
            "--app-name",
            "-n",
            help="Application name written to the acknowledgements",
        ),
    ] = None,
    workspace: WorkspaceOption = Path("."),
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output file, or directory to create acknowledgements.json in",
        ),
    ] = None,
    output_format: Annotated[
        Optional[OutputFormat],
        typer.Option(
            "--format",
            "-f",
            help="Output format",
        ),
    ] = None,
    template: Annotated[
        Optional[Path],
        typer.Option(
            "--template",
            "-t",
            help="Custom Jinja2 template for Markdown output",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ] = None,
    packages_dir: PackagesDirOption = None,
    derived_data: DerivedDataOption = False,
    derived_data_path: DerivedDataPathOption = None,
    alias: Annotated[
        Optional[list[str]],
        typer.Option(
            "--alias",
            "-a",
            help="Author alias as RAW=CANONICAL (repeatable)",
        ),
    ] = None,
    allow_missing_history: Annotated[
        bool,
        typer.Option(
            "--allow-missing-history",
            help="Write the report without contributors if git history is unavailable",
        ),
    ] = False,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Generate the acknowledgements file.

    Scans dependency manifests and git history of the workspace and writes
    the combined, sorted acknowledgements.
    """
    _setup_logging(verbose)

    try:
        settings = load_settings(workspace, config)
        app_name = app_name or settings.app_name
        if not app_name:
            raise typer.BadParameter(
                "Missing application name: pass --app-name or set app_name in "
                "the config file"
            )

        aliases = dict(settings.aliases)
        aliases.update(parse_alias(value) for value in alias or [])

        packages_root = _resolve_packages_root(
            settings, app_name, packages_dir, derived_data, derived_data_path
        )
        format_name = output_format.value if output_format else settings.format
        if template and format_name != "markdown":
            raise typer.BadParameter("--template only applies to --format markdown")
        reporter = (
            get_reporter(format_name, template_path=template)
            if template
            else get_reporter(format_name)
        )

        report, scan = build_report(
            app_name,
            workspace,
            packages_root=packages_root,
            aliases=aliases,
            allow_missing_history=allow_missing_history
            or settings.allow_missing_history,
        )

        output_path = reporter.output_path(output or settings.output or Path("."))
        reporter.write(report, output_path)
    except (typer.BadParameter, CreditsTrackerError, ValueError) as e:
        raise _fail(e)

    if verbose:
        for manifest in scan.manifests:
            console.print(f"[dim]Read {escape(str(manifest))}[/dim]")
    if scan.warnings:
        console.print(f"[yellow]Skipped {len(scan.warnings)} manifest entries[/yellow]")

    console.print(
        f"Found [bold]{len(report.packages)}[/bold] packages and "
        f"[bold]{len(report.contributors)}[/bold] contributors"
    )
    console.print(f"[green]Generated:[/green] {escape(str(output_path))}", highlight=False)
    raise typer.Exit(code=0)


@app.command()
def packages(
    workspace: WorkspaceOption = Path("."),
    packages_dir: PackagesDirOption = None,
    app_name: Annotated[
        Optional[str],
        typer.Option("--app-name", "-n", help="Application name (for --derived-data)"),
    ] = None,
    derived_data: DerivedDataOption = False,
    derived_data_path: DerivedDataPathOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the third-party packages found in the workspace manifests."""
    _setup_logging(verbose)

    try:
        settings = load_settings(workspace, config)
        root = _resolve_packages_root(
            settings,
            app_name or settings.app_name,
            packages_dir,
            derived_data,
            derived_data_path,
        )
        scan = scan_workspace(root or workspace)
    except (typer.BadParameter, CreditsTrackerError, ValueError) as e:
        raise _fail(e)

    if not scan.packages:
        console.print("[yellow]No packages found[/yellow]")
        raise typer.Exit(code=0)

    table = Table("Package", "License", "Author", "Manifest")
    for package in sorted(scan.packages, key=lambda p: p.name.lower()):
        table.add_row(
            escape(package.name),
            escape(package.license) if package.license else "[dim]unknown[/dim]",
            escape(package.author or ""),
            escape(package.source or ""),
        )
    console.print(table)

    counts = ", ".join(
        f"{count} from {escape(source)}"
        for source, count in summarize(scan.packages).items()
    )
    console.print(f"Found [bold]{len(scan.packages)}[/bold] packages ({counts})")


@app.command()
def contributors(
    workspace: WorkspaceOption = Path("."),
    alias: Annotated[
        Optional[list[str]],
        typer.Option(
            "--alias",
            "-a",
            help="Author alias as RAW=CANONICAL (repeatable)",
        ),
    ] = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the contributors merged from the workspace's git history."""
    _setup_logging(verbose)

    try:
        settings = load_settings(workspace, config)
        aliases = dict(settings.aliases)
        aliases.update(parse_alias(value) for value in alias or [])
        merged = collect_contributors(workspace, aliases=aliases)
    except (CreditsTrackerError, ValueError) as e:
        raise _fail(e)

    if not merged:
        console.print("[yellow]No contributors found[/yellow]")
        raise typer.Exit(code=0)

    table = Table("Contributor", "Commits")
    for contributor in sorted(merged, key=lambda c: c.name.lower()):
        table.add_row(escape(contributor.name), str(contributor.contributions))
    console.print(table)


if __name__ == "__main__":
    app()
