"""Rich console rendering of validation reports."""

import json
from enum import Enum

from rich.console import Console
from rich.markup import escape

from conval.validation import Diagnostic, ValidationReport

SEPARATOR = "=" * 50


class Outcome(str, Enum):
    PASS = "pass"
    FAIL = "fail"


def outcome(report: ValidationReport) -> Outcome:
    """Pass/fail decision: any error fails, warnings never do."""
    return Outcome.FAIL if report.has_errors else Outcome.PASS


def exit_status(report: ValidationReport) -> int:
    return 1 if outcome(report) == Outcome.FAIL else 0


def summary_line(report: ValidationReport) -> str:
    errors = len(report.errors)
    warnings = len(report.warnings)
    if report.has_errors:
        return f"VALIDATION FAILED: {errors} error(s), {warnings} warning(s)"
    if report.has_warnings:
        return f"VALIDATION PASSED with {warnings} warning(s)"
    return "VALIDATION PASSED"


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """One plain-text line per diagnostic."""
    line = f"{diagnostic.severity.value.upper()} [{diagnostic.rule}] {diagnostic.message}"
    where = " ".join(part for part in (diagnostic.document, diagnostic.location) if part)
    if where:
        line += f" ({where})"
    return line


class Reporter:
    """Renders validation reports to a console."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False, soft_wrap=True)

    def render(self, report: ValidationReport, title: str | None = None) -> int:
        """Print the report, errors before warnings, then a summary line.

        Returns:
            The exit status for the report
        """
        if title:
            self.console.print(f"[bold]Validating {escape(title)}[/bold] [dim]({report.mode.value})[/dim]")

        for diagnostic in report.errors:
            self.console.print(f"[red]{escape(format_diagnostic(diagnostic))}[/red]")
        for diagnostic in report.warnings:
            self.console.print(f"[yellow]{escape(format_diagnostic(diagnostic))}[/yellow]")

        if report.halted:
            self.console.print("[dim]Stopped at first error (fail-fast mode)[/dim]")

        color = "red" if report.has_errors else "yellow" if report.has_warnings else "green"
        self.console.print(SEPARATOR)
        self.console.print(f"[{color}]{summary_line(report)}[/{color}]")
        return exit_status(report)

    def render_json(self, report: ValidationReport, connector: str | None = None) -> int:
        data = {"connector": connector, **report.to_dict()}
        self.console.print_json(json.dumps(data))
        return exit_status(report)
