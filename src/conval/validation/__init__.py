"""Validation layer for connector manifests.

Rules check a loaded ConnectorManifest and report diagnostics; the engine
runs a profile's rule set in aggregate or fail-fast mode.
"""

from .framework import (
    Diagnostic,
    RuleSet,
    Severity,
    ValidationEngine,
    ValidationReport,
    ValidationRule,
    ValidationStatus,
    validate_connectors,
)
from .rulesets import build_rule_set

__all__ = [
    "Diagnostic",
    "RuleSet",
    "Severity",
    "ValidationEngine",
    "ValidationReport",
    "ValidationRule",
    "ValidationStatus",
    "build_rule_set",
    "validate_connectors",
]
