"""Fatal error types for conval runs.

Manifest defects are never raised; they are reported as diagnostics. These
exceptions abort a run before a report can be produced.
"""


class ConvalError(Exception):
    """Base class for fatal conval errors."""


class DocumentLoadError(ConvalError):
    """An input document could not be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ProfileError(ConvalError):
    """A connector profile is unknown or its definition is invalid."""


class RuleExecutionError(ConvalError):
    """A validation rule raised instead of reporting diagnostics."""

    def __init__(self, rule: str, cause: Exception):
        self.rule = rule
        self.cause = cause
        super().__init__(f"Rule {rule} failed with error: {cause}")
