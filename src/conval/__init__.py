"""conval - Validation CLI for API-integration connector manifests.

conval checks a connector's OpenAPI 2.0 definition, its apiProperties metadata and
its optional companion script against structural rules and a per-connector profile
before the connector is published.
"""

__version__ = "0.1.0"
__author__ = "conval contributors"
__description__ = "Validation CLI for API-integration connector manifests"

from conval.config import ConnectorProfile, ExecutionMode

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "ConnectorProfile",
    "ExecutionMode",
]
