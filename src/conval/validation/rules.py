"""Validation rules for connector manifests.

Each rule checks one aspect of a connector and reports every problem it
finds as a diagnostic. Generic rules apply to every connector; the
connector-profile rules at the end take their expected literals from a
ConnectorProfile.
"""

import logging

from ..models import ConnectorManifest
from .framework import Diagnostic, Severity, ValidationRule

logger = logging.getLogger(__name__)

DEFINITION = "definition"
PROPERTIES = "properties"
SCRIPT = "script"

SWAGGER_VERSION = "2.0"
REQUIRED_FIELDS = ("info", "host", "basePath", "paths", "securityDefinitions")
MAX_TITLE_LENGTH = 50
ERROR_RESPONSE_CODES = ("400", "401", "403", "404", "429", "500")


def _blank(value) -> bool:
    return value is None or value == ""


def _present(value) -> bool:
    return value is not None and value != "" and value is not False


# Structural rules


class SwaggerVersionRule(ValidationRule):
    """The definition must declare swagger 2.0."""

    @property
    def name(self) -> str:
        return "swagger_version"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        swagger = manifest.definition.swagger
        if swagger == SWAGGER_VERSION:
            return []
        found = "missing" if swagger is None else f"found {swagger!r}"
        return [
            self.diagnostic(
                f"Definition must use version {SWAGGER_VERSION} (swagger: \"{SWAGGER_VERSION}\"), {found}",
                DEFINITION,
                "swagger",
            )
        ]


class RequiredFieldsRule(ValidationRule):
    """Top-level definition fields the platform requires."""

    @property
    def name(self) -> str:
        return "required_fields"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        return [
            self.diagnostic(f"Missing required field: {field}", DEFINITION, field)
            for field in REQUIRED_FIELDS
            if not manifest.definition.has_field(field)
        ]


class InfoFieldsRule(ValidationRule):
    """info.title and info.version, when info is present."""

    @property
    def name(self) -> str:
        return "info_fields"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        info = manifest.definition.info
        if info is None:
            if manifest.definition.has_field("info"):
                return [self.diagnostic("info must be an object", DEFINITION, "info")]
            return []  # Reported by required_fields

        diagnostics = []
        if _blank(info.title):
            diagnostics.append(self.diagnostic("Missing info.title", DEFINITION, "info.title"))
        if _blank(info.version):
            diagnostics.append(self.diagnostic("Missing info.version", DEFINITION, "info.version"))
        return diagnostics


class TitleLengthRule(ValidationRule):
    """Long titles are truncated by the platform."""

    severity = Severity.WARNING

    @property
    def name(self) -> str:
        return "title_length"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        info = manifest.definition.info
        if info is None or not info.title or len(info.title) <= MAX_TITLE_LENGTH:
            return []
        return [
            self.diagnostic(
                f"Title exceeds {MAX_TITLE_LENGTH} characters ({len(info.title)})",
                DEFINITION,
                "info.title",
            )
        ]


# Security rules


class SecurityDefinitionsRule(ValidationRule):
    """At least one security scheme must be defined."""

    @property
    def name(self) -> str:
        return "security_definitions"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        schemes = manifest.definition.security_definitions
        if schemes is None or schemes:
            return []  # Absence is reported by required_fields
        return [self.diagnostic("No security definitions found", DEFINITION, "securityDefinitions")]


class ApiKeySchemeRule(ValidationRule):
    """The connector's API key scheme: type, location and header name.

    The three checks are independent; a wrong type does not hide a wrong
    header name.
    """

    def __init__(self, scheme: str = "api_key", expected_header: str | None = None,
                 required: bool = False):
        self.scheme = scheme
        self.expected_header = expected_header
        self.required = required

    @property
    def name(self) -> str:
        return "api_key_scheme"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        schemes = manifest.definition.security_definitions or {}
        location = f"securityDefinitions.{self.scheme}"
        scheme = schemes.get(self.scheme)

        if scheme is None:
            if self.required:
                return [self.diagnostic(f"Missing {self.scheme} security definition", DEFINITION, location)]
            return []

        diagnostics = []
        if scheme.type != "apiKey":
            diagnostics.append(
                self.diagnostic(f"{self.scheme} must have type \"apiKey\"", DEFINITION, f"{location}.type")
            )
        if scheme.location != "header":
            diagnostics.append(
                self.diagnostic(f"{self.scheme} must be in header", DEFINITION, f"{location}.in")
            )
        if self.expected_header is not None and scheme.name != self.expected_header:
            diagnostics.append(
                self.diagnostic(
                    f"{self.scheme} header name must be \"{self.expected_header}\", found {scheme.name!r}",
                    DEFINITION,
                    f"{location}.name",
                )
            )
        return diagnostics


class ApiKeyLocationRule(ValidationRule):
    """Every other apiKey scheme must also be sent in a header."""

    def __init__(self, exclude: str | None = None):
        self.exclude = exclude

    @property
    def name(self) -> str:
        return "api_key_location"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        return [
            self.diagnostic(
                f"apiKey scheme {scheme.key} must be in header, found {scheme.location!r}",
                DEFINITION,
                f"securityDefinitions.{scheme.key}.in",
            )
            for scheme in manifest.definition.api_key_schemes
            if scheme.key != self.exclude and scheme.location != "header"
        ]


# Operation rules


class OperationIdRule(ValidationRule):
    """Every operation needs an operationId."""

    @property
    def name(self) -> str:
        return "operation_id"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        return [
            self.diagnostic(f"Missing operationId for {op.location}", DEFINITION, op.location)
            for op in manifest.definition.operations
            if _blank(op.operation_id)
        ]


class DuplicateOperationIdRule(ValidationRule):
    """operationIds are unique across the whole definition."""

    @property
    def name(self) -> str:
        return "duplicate_operation_id"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        seen: dict[str, str] = {}
        diagnostics = []
        for op in manifest.definition.operations:
            if not op.operation_id:
                continue
            if op.operation_id in seen:
                diagnostics.append(
                    self.diagnostic(
                        f"Duplicate operationId: {op.operation_id} (first declared at {seen[op.operation_id]})",
                        DEFINITION,
                        op.location,
                    )
                )
            else:
                seen[op.operation_id] = op.location
        return diagnostics


class OperationSummaryRule(ValidationRule):
    severity = Severity.WARNING

    @property
    def name(self) -> str:
        return "operation_summary"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        return [
            self.diagnostic(f"Missing summary for {op.label}", DEFINITION, op.location)
            for op in manifest.definition.operations
            if _blank(op.summary)
        ]


class OperationResponsesRule(ValidationRule):
    @property
    def name(self) -> str:
        return "operation_responses"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        return [
            self.diagnostic(f"Missing responses for {op.label}", DEFINITION, op.location)
            for op in manifest.definition.operations
            if op.responses is None
        ]


class ErrorResponsesRule(ValidationRule):
    """At least one documented error response per operation."""

    severity = Severity.WARNING

    @property
    def name(self) -> str:
        return "error_responses"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        return [
            self.diagnostic(f"No error responses defined for {op.label}", DEFINITION, op.location)
            for op in manifest.definition.operations
            if op.responses is not None
            and not any(op.responses.get(code) is not None for code in ERROR_RESPONSE_CODES)
        ]


# Properties rules


class ConnectionParametersRule(ValidationRule):
    """connectionParameters must exist, and hold the key when an API key is used."""

    @property
    def name(self) -> str:
        return "connection_parameters"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        parameters = manifest.properties.connection_parameters
        if parameters is None:
            return [
                self.diagnostic(
                    "Missing connectionParameters in apiProperties",
                    PROPERTIES,
                    "properties.connectionParameters",
                )
            ]
        if not parameters and manifest.definition.api_key_schemes:
            return [
                self.diagnostic(
                    "connectionParameters is empty but the definition requires an API key",
                    PROPERTIES,
                    "properties.connectionParameters",
                )
            ]
        return []


class PublisherRule(ValidationRule):
    severity = Severity.WARNING

    @property
    def name(self) -> str:
        return "publisher"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        if not _blank(manifest.properties.publisher):
            return []
        return [self.diagnostic("Missing publisher in apiProperties", PROPERTIES, "properties.publisher")]


# Connector-profile rules


class ExpectedHostRule(ValidationRule):
    def __init__(self, expected_host: str):
        self.expected_host = expected_host

    @property
    def name(self) -> str:
        return "expected_host"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        host = manifest.definition.host
        if host == self.expected_host:
            return []
        return [
            self.diagnostic(f"Expected host {self.expected_host}, got {host}", DEFINITION, "host")
        ]


class RequiredOperationsRule(ValidationRule):
    """Operations the connector must expose, one diagnostic per missing one."""

    def __init__(self, operations: list[str]):
        self.operations = list(operations)

    @property
    def name(self) -> str:
        return "required_operations"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        declared = set(manifest.definition.operation_ids)
        return [
            self.diagnostic(f"Missing required operation: {op}", DEFINITION, "paths")
            for op in self.operations
            if op not in declared
        ]


class RequiredConnectionParametersRule(ValidationRule):
    def __init__(self, parameters: list[str]):
        self.parameters = list(parameters)

    @property
    def name(self) -> str:
        return "required_connection_parameters"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        declared = manifest.properties.connection_parameters or {}
        return [
            self.diagnostic(
                f"Missing {param} connection parameter",
                PROPERTIES,
                f"properties.connectionParameters.{param}",
            )
            for param in self.parameters
            if not _present(declared.get(param))
        ]


class RequiredPolicyTemplatesRule(ValidationRule):
    def __init__(self, template_ids: list[str]):
        self.template_ids = list(template_ids)

    @property
    def name(self) -> str:
        return "required_policy_templates"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        declared = set(manifest.properties.template_ids)
        return [
            self.diagnostic(
                f"Missing {template_id} policy template",
                PROPERTIES,
                "properties.policyTemplateInstances",
            )
            for template_id in self.template_ids
            if template_id not in declared
        ]


class ScriptBindingRule(ValidationRule):
    """apiProperties must bind the script and the operations it intercepts."""

    def __init__(self, script_file: str, operations: list[str]):
        self.script_file = script_file
        self.operations = list(operations)

    @property
    def name(self) -> str:
        return "script_binding"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        properties = manifest.properties
        diagnostics = []
        if properties.script != self.script_file:
            diagnostics.append(
                self.diagnostic(
                    f"script not set to {self.script_file} in apiProperties",
                    PROPERTIES,
                    "properties.script",
                )
            )
        bound = set(properties.script_operations or ())
        for op in self.operations:
            if op not in bound:
                diagnostics.append(
                    self.diagnostic(
                        f"scriptOperations must include {op}",
                        PROPERTIES,
                        "properties.scriptOperations",
                    )
                )
        return diagnostics


class ScriptContentRule(ValidationRule):
    """Companion script exists and mentions the expected tokens.

    This is a substring heuristic only. A script can contain a token by
    coincidence, or implement the behavior without spelling the token, and
    neither case is detected.
    """

    def __init__(self, script_file: str, required_tokens: list[str]):
        self.script_file = script_file
        self.required_tokens = list(required_tokens)

    @property
    def name(self) -> str:
        return "script_content"

    def check(self, manifest: ConnectorManifest) -> list[Diagnostic]:
        if manifest.script is None:
            return [self.diagnostic(f"{self.script_file} does not exist", SCRIPT, self.script_file)]
        return [
            self.diagnostic(f"{self.script_file} does not reference '{token}'", SCRIPT, self.script_file)
            for token in self.required_tokens
            if token not in manifest.script
        ]
