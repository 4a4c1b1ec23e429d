"""Read-only views over parsed connector documents."""

from .definition import HTTP_METHODS, ConnectorDefinition, Info, Operation, SecurityScheme
from .manifest import ConnectorManifest
from .properties import PolicyTemplateInstance, PropertiesDocument

__all__ = [
    "HTTP_METHODS",
    "ConnectorDefinition",
    "ConnectorManifest",
    "Info",
    "Operation",
    "PolicyTemplateInstance",
    "PropertiesDocument",
    "SecurityScheme",
]
