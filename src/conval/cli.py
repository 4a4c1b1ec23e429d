"""Command-line interface for conval."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from conval import __description__, __version__
from conval.config import ConnectorProfile, LogLevel, OutputFormat, find_profile_file
from conval.errors import ConvalError, ProfileError
from conval.loader import load_manifest
from conval.profiles import list_profiles, resolve_profile
from conval.reporting import Reporter, summary_line
from conval.validation import ValidationEngine, ValidationReport, build_rule_set, validate_connectors

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="conval",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console(highlight=False, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"conval version {__version__}")
        raise typer.Exit()


def _setup_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.as_logging_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", help="Logging level for diagnostics on stderr")
    ] = LogLevel.WARN,
) -> None:
    """conval - Validate connector manifests before publishing."""
    _setup_logging(log_level)


def validate_connector(connector_dir: Path, profile: ConnectorProfile) -> ValidationReport:
    """Load one connector and run its profile's rule set.

    Raises:
        ConvalError: If a document cannot be loaded or a rule is broken
    """
    manifest = load_manifest(connector_dir, profile)
    engine = ValidationEngine(build_rule_set(profile))
    return engine.validate(manifest)


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(help="Connector directory (default: current directory)")
    ] = Path("."),
    profile: Annotated[
        str,
        typer.Option("--profile", "-p", help="Built-in profile name (default: resolved from the directory)")
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text, json (default: text)")
    ] = OutputFormat.TEXT,
) -> None:
    """Validate one connector's definition, properties and script."""
    reporter = Reporter(console)
    try:
        connector_dir = path.resolve()
        if not connector_dir.is_dir():
            console.print(f"[red]Error:[/red] Not a directory: {escape(str(path))}")
            raise typer.Exit(1)

        connector_profile = resolve_profile(connector_dir, profile)
        report = validate_connector(connector_dir, connector_profile)
    except ConvalError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if format == OutputFormat.JSON:
        exit_code = reporter.render_json(report, connector_dir.name)
    else:
        exit_code = reporter.render(report, f"{connector_dir.name} connector ({connector_profile.name})")
    raise typer.Exit(exit_code)


@app.command("validate-all")
def validate_all(
    root: Annotated[
        Path,
        typer.Argument(help="Directory containing one subdirectory per connector")
    ] = Path("."),
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", min=1, help="Connectors validated in parallel")
    ] = 4,
) -> None:
    """Validate every connector directory under ROOT."""
    root = root.resolve()
    if not root.is_dir():
        console.print(f"[red]Error:[/red] Not a directory: {escape(str(root))}")
        raise typer.Exit(1)

    targets: list[tuple[Path, ConnectorProfile]] = []
    rejected: dict[Path, ProfileError] = {}
    for connector_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        try:
            connector_profile = resolve_profile(connector_dir)
        except ProfileError as e:
            if find_profile_file(connector_dir) is not None:
                rejected[connector_dir] = e
            else:
                logger.info(f"Skipping {connector_dir.name}: {e}")
            continue
        if (connector_dir / connector_profile.definition_file).exists():
            targets.append((connector_dir, connector_profile))

    if not targets and not rejected:
        console.print(f"[yellow]No connectors found in {escape(str(root))}[/yellow]")
        raise typer.Exit(0)

    def run(target: tuple[Path, ConnectorProfile]) -> ValidationReport | ConvalError:
        try:
            return validate_connector(*target)
        except ConvalError as e:
            return e

    results = validate_connectors(targets, run, max_workers=workers)

    # A broken profile file fails its connector like a broken document
    outcomes: dict[Path, tuple[str, ValidationReport | ConvalError]] = {
        connector_dir: ("-", error) for connector_dir, error in rejected.items()
    }
    for (connector_dir, connector_profile), result in zip(targets, results):
        outcomes[connector_dir] = (connector_profile.name, result)

    reporter = Reporter(console)
    failed = []
    for connector_dir in sorted(outcomes):
        profile_name, result = outcomes[connector_dir]
        if isinstance(result, ConvalError):
            console.print(f"[red]Error:[/red] {connector_dir.name}: {escape(str(result))}")
            failed.append(connector_dir.name)
            continue
        if reporter.render(result, f"{connector_dir.name} connector ({profile_name})"):
            failed.append(connector_dir.name)
        console.print("")

    table = Table(title="Connectors")
    table.add_column("Connector", style="cyan")
    table.add_column("Profile", style="white")
    table.add_column("Result", style="white")
    for connector_dir in sorted(outcomes):
        profile_name, result = outcomes[connector_dir]
        if isinstance(result, ConvalError):
            status = "[red]LOAD ERROR[/red]"
        else:
            color = "red" if result.has_errors else "yellow" if result.has_warnings else "green"
            status = f"[{color}]{summary_line(result)}[/{color}]"
        table.add_row(connector_dir.name, profile_name, status)
    console.print(table)

    raise typer.Exit(1 if failed else 0)


@app.command("profiles")
def profiles() -> None:
    """List the built-in connector profiles."""
    table = Table(title="Connector Profiles")
    table.add_column("Name", style="cyan")
    table.add_column("Definition", style="white")
    table.add_column("Host", style="white")
    table.add_column("Header", style="white")
    table.add_column("Required Operations", style="white")
    table.add_column("Mode", style="dim")

    for connector_profile in list_profiles():
        table.add_row(
            connector_profile.name,
            connector_profile.definition_file,
            connector_profile.expected_host or "-",
            connector_profile.expected_header or "-",
            ", ".join(connector_profile.required_operations) or "-",
            connector_profile.mode.value,
        )

    console.print(table)


if __name__ == "__main__":
    app()
