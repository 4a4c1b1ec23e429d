"""Core validation framework for connector manifests.

Rules are pluggable checks over a loaded ConnectorManifest. A RuleSet fixes
their order and the execution mode; the engine runs them and collects the
diagnostics into a ValidationReport.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..config import ExecutionMode
from ..errors import RuleExecutionError
from ..models import ConnectorManifest

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Diagnostic severity. Only errors affect the exit status."""
    ERROR = "error"
    WARNING = "warning"


class ValidationStatus(str, Enum):
    """Overall status of a report."""
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


@dataclass(frozen=True)
class Diagnostic:
    """A single issue found by a rule."""
    rule: str
    severity: Severity
    message: str
    document: str | None = None
    location: str | None = None

    def __str__(self) -> str:
        where = ""
        if self.document:
            where += f" in {self.document}"
        if self.location:
            where += f" at {self.location}"
        return f"[{self.severity.value.upper()}] {self.rule}: {self.message}{where}"

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
            "document": self.document,
            "location": self.location,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Ordered diagnostics of one validation run."""
    diagnostics: tuple[Diagnostic, ...] = ()
    mode: ExecutionMode = ExecutionMode.AGGREGATE
    rules_run: tuple[str, ...] = ()
    halted: bool = False

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def has_warnings(self) -> bool:
        return any(d.severity == Severity.WARNING for d in self.diagnostics)

    @property
    def status(self) -> ValidationStatus:
        if self.has_errors:
            return ValidationStatus.FAIL
        if self.has_warnings:
            return ValidationStatus.WARN
        return ValidationStatus.PASS

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = pass/warn, 1 = fail."""
        return 1 if self.has_errors else 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "mode": self.mode.value,
            "halted": self.halted,
            "rules_run": list(self.rules_run),
            "counters": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class ValidationRule(ABC):
    """Base class for validation rules.

    A rule inspects a manifest and returns diagnostics. It must not raise
    for an invalid manifest; reporting that is its whole purpose.
    """

    severity: Severity = Severity.ERROR

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        """Execute the rule.

        Args:
            manifest: Loaded connector documents

        Returns:
            Diagnostics found, in a deterministic order
        """
        pass

    def diagnostic(self, message: str, document: str | None = None,
                   location: str | None = None) -> Diagnostic:
        return Diagnostic(self.name, self.severity, message, document, location)


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules plus the execution mode used to run them."""
    name: str
    rules: tuple[ValidationRule, ...] = field(default_factory=tuple)
    mode: ExecutionMode = ExecutionMode.AGGREGATE

    @property
    def rule_names(self) -> list[str]:
        return [rule.name for rule in self.rules]


class ValidationEngine:
    """Runs a rule set against connector manifests."""

    def __init__(self, rule_set: RuleSet):
        self.rule_set = rule_set

    def validate(self, manifest: ConnectorManifest) -> ValidationReport:
        """Run every rule of the rule set against a manifest.

        In aggregate mode all rules run. In fail-fast mode the run stops at
        the first error diagnostic; nothing after it is kept.

        Raises:
            RuleExecutionError: If a rule raises instead of reporting
        """
        mode = self.rule_set.mode
        collected: list[Diagnostic] = []
        rules_run: list[str] = []
        halted = False

        logger.info(f"Validating {manifest.name} with rule set '{self.rule_set.name}' ({mode.value})")
        logger.info(f"Running {len(self.rule_set.rules)} validation rules")

        for rule in self.rule_set.rules:
            logger.debug(f"Executing rule: {rule.name}")
            try:
                diagnostics = list(rule.check(manifest))
            except Exception as e:
                logger.error(f"Rule {rule.name} failed with error: {e}")
                raise RuleExecutionError(rule.name, e) from e
            rules_run.append(rule.name)

            if mode == ExecutionMode.FAIL_FAST:
                first_error = _first_error_index(diagnostics)
                if first_error is not None:
                    collected.extend(diagnostics[:first_error + 1])
                    halted = True
                    logger.info(f"Stopping after rule {rule.name}: fail-fast mode")
                    break
            collected.extend(diagnostics)

        report = ValidationReport(
            diagnostics=tuple(collected),
            mode=mode,
            rules_run=tuple(rules_run),
            halted=halted,
        )
        logger.info(f"Validation completed with status: {report.status.value}")
        logger.info(f"Found {len(report.diagnostics)} diagnostics")
        return report


def _first_error_index(diagnostics: Sequence[Diagnostic]) -> int | None:
    for i, diagnostic in enumerate(diagnostics):
        if diagnostic.severity == Severity.ERROR:
            return i
    return None


def validate_connectors(
    connector_dirs: Iterable[Path],
    validate_one,
    max_workers: int | None = None,
) -> list:
    """Validate independent connectors concurrently.

    Args:
        connector_dirs: Connector directories to validate
        validate_one: Callable taking a directory and returning its result
        max_workers: Thread pool size (default: executor's choice)

    Returns:
        Results in the order of ``connector_dirs``
    """
    connector_dirs = list(connector_dirs)
    if not connector_dirs:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(validate_one, connector_dirs))
