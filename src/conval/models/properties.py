"""Views over the apiProperties metadata document."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PolicyTemplateInstance:
    """A policy template applied to the connector, e.g. ``setheader``."""
    template_id: str | None
    parameters: dict = field(default_factory=dict)

    @classmethod
    def from_document(cls, data: Any) -> "PolicyTemplateInstance":
        if not isinstance(data, dict):
            return cls(template_id=None)
        template_id = data.get("templateId")
        parameters = data.get("parameters")
        return cls(
            template_id=template_id if isinstance(template_id, str) else None,
            parameters=parameters if isinstance(parameters, dict) else {},
        )


@dataclass(frozen=True)
class PropertiesDocument:
    """The ``properties`` object of an apiProperties document.

    ``None`` marks an absent field. ``has_properties`` is False when the
    document has no ``properties`` object at all.
    """
    raw: dict = field(repr=False)
    has_properties: bool = False
    connection_parameters: dict | None = None
    publisher: str | None = None
    policy_template_instances: tuple[PolicyTemplateInstance, ...] = ()
    script: str | None = None
    script_operations: tuple[str, ...] | None = None

    @classmethod
    def from_document(cls, data: dict) -> "PropertiesDocument":
        properties = data.get("properties")
        if not isinstance(properties, dict):
            return cls(raw=data)

        connection_parameters = properties.get("connectionParameters")
        publisher = properties.get("publisher")
        policies = properties.get("policyTemplateInstances")
        script = properties.get("script")
        script_operations = properties.get("scriptOperations")

        return cls(
            raw=data,
            has_properties=True,
            connection_parameters=connection_parameters if isinstance(connection_parameters, dict) else None,
            publisher=publisher if isinstance(publisher, str) else None,
            policy_template_instances=tuple(
                PolicyTemplateInstance.from_document(p) for p in policies
            ) if isinstance(policies, list) else (),
            script=script if isinstance(script, str) else None,
            script_operations=tuple(
                op for op in script_operations if isinstance(op, str)
            ) if isinstance(script_operations, list) else None,
        )

    @property
    def template_ids(self) -> list[str]:
        return [p.template_id for p in self.policy_template_instances if p.template_id]
