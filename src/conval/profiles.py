"""Built-in connector profiles and profile resolution."""

import logging
from pathlib import Path

from conval.config import (
    ConnectorProfile,
    ExecutionMode,
    ScriptExpectation,
    find_profile_file,
    load_profile,
)
from conval.errors import ProfileError

logger = logging.getLogger(__name__)

GENERIC_PROFILE_NAME = "generic"

CLAUDE = ConnectorProfile(
    name="claude",
    definition_file="claude-connector.json",
    expected_header="x-api-key",
    mode=ExecutionMode.AGGREGATE,
)

GEMINI = ConnectorProfile(
    name="gemini",
    definition_file="gemini-connector.json",
    expected_host="generativelanguage.googleapis.com",
    required_operations=["AskGemini", "GenerateContent"],
    required_connection_parameters=["gemini_api_key"],
    script=ScriptExpectation(
        file="script.csx",
        operations=["AskGemini"],
        required_tokens=["AskGemini", "contents"],
    ),
    mode=ExecutionMode.AGGREGATE,
)

FORIT_AI = ConnectorProfile(
    name="forit-ai",
    definition_file="forit-ai-connector.json",
    expected_host="ai.forit.io",
    require_security_scheme=True,
    expected_header="x-forit-license",
    required_operations=["AskAI", "AskClaude", "AskGemini", "GetLicenseStatus"],
    required_connection_parameters=["api_key"],
    required_policy_templates=["setheader"],
    mode=ExecutionMode.FAIL_FAST,
    profile_rules_first=True,
)

BUILTIN_PROFILES: dict[str, ConnectorProfile] = {
    profile.name: profile for profile in (CLAUDE, GEMINI, FORIT_AI)
}


def get_profile(name: str) -> ConnectorProfile:
    """Look up a built-in profile by name."""
    try:
        return BUILTIN_PROFILES[name]
    except KeyError:
        available = ", ".join(sorted(BUILTIN_PROFILES))
        raise ProfileError(f"Unknown profile '{name}'. Available profiles: {available}")


def list_profiles() -> list[ConnectorProfile]:
    return [BUILTIN_PROFILES[name] for name in sorted(BUILTIN_PROFILES)]


def generic_profile(connector_dir: Path) -> ConnectorProfile | None:
    """Structural-only profile for a directory holding a single *-connector.json."""
    candidates = sorted(Path(connector_dir).glob("*-connector.json"))
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.warning(
            f"Multiple connector definitions in {connector_dir}, using {candidates[0].name}"
        )
    return ConnectorProfile(name=GENERIC_PROFILE_NAME, definition_file=candidates[0].name)


def resolve_profile(connector_dir: Path, name: str | None = None) -> ConnectorProfile:
    """Pick the profile for a connector directory.

    Resolution order: explicit name, the directory's own profile file, a
    built-in profile named like the directory, then the generic profile.

    Raises:
        ProfileError: If no profile applies to the directory
    """
    connector_dir = Path(connector_dir)

    if name is not None:
        return get_profile(name)

    profile_file = find_profile_file(connector_dir)
    if profile_file:
        logger.info(f"Using profile file {profile_file}")
        return load_profile(profile_file)

    builtin = BUILTIN_PROFILES.get(connector_dir.resolve().name)
    if builtin:
        logger.info(f"Using built-in profile '{builtin.name}' for {connector_dir}")
        return builtin

    generic = generic_profile(connector_dir)
    if generic:
        logger.info(f"Using generic profile for {connector_dir} ({generic.definition_file})")
        return generic

    raise ProfileError(f"No connector profile applies to {connector_dir}")
