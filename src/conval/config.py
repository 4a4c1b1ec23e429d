"""Configuration management for conval using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from conval.errors import ProfileError

PROFILE_FILE_NAME = ".conval.json"


class ExecutionMode(str, Enum):
    """How a rule set reacts to error diagnostics."""
    AGGREGATE = "aggregate"
    FAIL_FAST = "fail_fast"


class OutputFormat(str, Enum):
    """Report output formats."""
    TEXT = "text"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    @property
    def as_logging_level(self) -> str:
        return "WARNING" if self is LogLevel.WARN else self.value.upper()


class ScriptExpectation(BaseModel):
    """Companion script a connector profile binds to its operations."""
    file: str = "script.csx"
    operations: list[str] = Field(default_factory=list)
    required_tokens: list[str] = Field(alias="requiredTokens", default_factory=list)

    @field_validator("file")
    @classmethod
    def validate_file(cls, v):
        if not v or "/" in v or "\\" in v:
            raise ValueError("script file must be a plain file name in the connector directory")
        return v

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ConnectorProfile(BaseModel):
    """Fixed expectations for one connector.

    Literals that used to be hardcoded per connector (host, header name,
    required operations, policy templates) live here as data, so a new
    connector needs a profile rather than new validation code.
    """
    name: str
    definition_file: str = Field(alias="definitionFile")
    properties_file: str = Field(alias="propertiesFile", default="apiProperties.json")
    expected_host: str | None = Field(alias="expectedHost", default=None)
    security_scheme: str = Field(alias="securityScheme", default="api_key")
    require_security_scheme: bool = Field(alias="requireSecurityScheme", default=False)
    expected_header: str | None = Field(alias="expectedHeader", default=None)
    required_operations: list[str] = Field(alias="requiredOperations", default_factory=list)
    required_connection_parameters: list[str] = Field(
        alias="requiredConnectionParameters", default_factory=list
    )
    required_policy_templates: list[str] = Field(alias="requiredPolicyTemplates", default_factory=list)
    script: ScriptExpectation | None = None
    mode: ExecutionMode = ExecutionMode.AGGREGATE
    profile_rules_first: bool = Field(alias="profileRulesFirst", default=False)

    @field_validator("name", "definition_file", "properties_file")
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("required_operations")
    @classmethod
    def validate_unique_operations(cls, v):
        if len(set(v)) != len(v):
            raise ValueError("required operations must be unique")
        return v

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


def load_profile(profile_path: str | Path) -> ConnectorProfile:
    """Load a connector profile from a JSON file.

    Args:
        profile_path: Path to the profile file

    Returns:
        ConnectorProfile: Loaded and validated profile

    Raises:
        ProfileError: If the file is missing, not JSON, or not a valid profile
    """
    profile_path = Path(profile_path)
    try:
        with open(profile_path, encoding="utf-8") as f:
            profile_data = json.load(f)
    except FileNotFoundError:
        raise ProfileError(f"Profile file not found: {profile_path}")
    except json.JSONDecodeError as e:
        raise ProfileError(f"Invalid JSON in profile file {profile_path}: {e}")
    except OSError as e:
        raise ProfileError(f"Failed to read profile file {profile_path}: {e}")

    if not isinstance(profile_data, dict):
        raise ProfileError(f"Profile file {profile_path} must contain a JSON object")

    try:
        return ConnectorProfile(**profile_data)
    except ValidationError as e:
        raise ProfileError(f"Invalid profile in {profile_path}: {e}")


def find_profile_file(connector_dir: Path) -> Path | None:
    """Return the connector's own profile file, if it ships one."""
    candidate = Path(connector_dir) / PROFILE_FILE_NAME
    return candidate if candidate.is_file() else None
