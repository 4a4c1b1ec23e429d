"""The loaded inputs of one connector."""

from dataclasses import dataclass
from pathlib import Path

from .definition import ConnectorDefinition
from .properties import PropertiesDocument


@dataclass(frozen=True)
class ConnectorManifest:
    """Definition, properties and optional companion script of one connector.

    ``script`` is None when the profile declares no script or the script
    file does not exist.
    """
    connector_dir: Path
    definition: ConnectorDefinition
    properties: PropertiesDocument
    script: str | None = None
    script_file: str | None = None

    @property
    def name(self) -> str:
        return self.connector_dir.resolve().name

    @classmethod
    def from_documents(
        cls,
        definition: dict,
        properties: dict,
        script: str | None = None,
        connector_dir: Path | str = ".",
        script_file: str | None = None,
    ) -> "ConnectorManifest":
        return cls(
            connector_dir=Path(connector_dir),
            definition=ConnectorDefinition.from_document(definition),
            properties=PropertiesDocument.from_document(properties),
            script=script,
            script_file=script_file,
        )
