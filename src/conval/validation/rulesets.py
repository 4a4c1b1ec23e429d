"""Rule set construction from connector profiles."""

import logging

from ..config import ConnectorProfile
from .framework import RuleSet, ValidationRule
from .rules import (
    ApiKeyLocationRule,
    ApiKeySchemeRule,
    ConnectionParametersRule,
    DuplicateOperationIdRule,
    ErrorResponsesRule,
    ExpectedHostRule,
    InfoFieldsRule,
    OperationIdRule,
    OperationResponsesRule,
    OperationSummaryRule,
    PublisherRule,
    RequiredConnectionParametersRule,
    RequiredFieldsRule,
    RequiredOperationsRule,
    RequiredPolicyTemplatesRule,
    ScriptBindingRule,
    ScriptContentRule,
    SecurityDefinitionsRule,
    SwaggerVersionRule,
    TitleLengthRule,
)

logger = logging.getLogger(__name__)


def create_default_rules(profile: ConnectorProfile) -> list[ValidationRule]:
    """Generic rules every connector is checked against, in declared order."""
    return [
        SwaggerVersionRule(),
        RequiredFieldsRule(),
        InfoFieldsRule(),
        TitleLengthRule(),
        SecurityDefinitionsRule(),
        ApiKeySchemeRule(
            scheme=profile.security_scheme,
            expected_header=profile.expected_header,
            required=profile.require_security_scheme,
        ),
        ApiKeyLocationRule(exclude=profile.security_scheme),
        OperationIdRule(),
        DuplicateOperationIdRule(),
        OperationSummaryRule(),
        OperationResponsesRule(),
        ErrorResponsesRule(),
        ConnectionParametersRule(),
        PublisherRule(),
    ]


def create_profile_rules(profile: ConnectorProfile) -> list[ValidationRule]:
    """Rules that only exist because the profile configures them."""
    rules: list[ValidationRule] = []
    if profile.expected_host:
        rules.append(ExpectedHostRule(profile.expected_host))
    if profile.required_operations:
        rules.append(RequiredOperationsRule(profile.required_operations))
    if profile.required_connection_parameters:
        rules.append(RequiredConnectionParametersRule(profile.required_connection_parameters))
    if profile.required_policy_templates:
        rules.append(RequiredPolicyTemplatesRule(profile.required_policy_templates))
    if profile.script is not None:
        rules.append(ScriptBindingRule(profile.script.file, profile.script.operations))
        rules.append(ScriptContentRule(profile.script.file, profile.script.required_tokens))
    return rules


def build_rule_set(profile: ConnectorProfile) -> RuleSet:
    """Ordered rule set for a connector profile.

    Profile rules follow the generic rules unless the profile sets
    ``profile_rules_first``, in which case they run right after the swagger
    version check. Under fail-fast this decides which error is reported.
    """
    default_rules = create_default_rules(profile)
    profile_rules = create_profile_rules(profile)
    if profile.profile_rules_first:
        rules = default_rules[:1] + profile_rules + default_rules[1:]
    else:
        rules = default_rules + profile_rules
    logger.debug(f"Built rule set '{profile.name}' with {len(rules)} rules ({profile.mode.value})")
    return RuleSet(name=profile.name, rules=tuple(rules), mode=profile.mode)
