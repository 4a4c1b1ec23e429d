"""Views over the OpenAPI 2.0 connector definition document.

Fields mirror the document. ``None`` always means the field is absent (or
not of the expected JSON type); an empty string or empty object is kept as
is, so rules can tell "missing" apart from "present but empty".
"""

from dataclasses import dataclass, field
from typing import Any

HTTP_METHODS = ("get", "post", "put", "patch", "delete")


def _mapping(value: Any) -> dict | None:
    return value if isinstance(value, dict) else None


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Info:
    """The definition's ``info`` block."""
    title: str | None = None
    version: str | None = None

    @classmethod
    def from_document(cls, data: dict) -> "Info":
        version = data.get("version")
        # Numeric versions such as 1.0 are still a declared version
        if isinstance(version, (int, float)) and not isinstance(version, bool):
            version = str(version)
        return cls(title=_text(data.get("title")), version=_text(version))


@dataclass(frozen=True)
class SecurityScheme:
    """One entry of ``securityDefinitions``."""
    key: str
    type: str | None = None
    location: str | None = None  # the document's "in" field
    name: str | None = None

    @property
    def is_api_key(self) -> bool:
        return self.type == "apiKey"

    @classmethod
    def from_document(cls, key: str, data: Any) -> "SecurityScheme":
        data = _mapping(data) or {}
        return cls(
            key=key,
            type=_text(data.get("type")),
            location=_text(data.get("in")),
            name=_text(data.get("name")),
        )


@dataclass(frozen=True)
class Operation:
    """An operation under one of the recognized HTTP verbs of a path."""
    path: str
    method: str
    operation_id: str | None = None
    summary: str | None = None
    responses: dict | None = None

    @property
    def location(self) -> str:
        return f"{self.method.upper()} {self.path}"

    @property
    def label(self) -> str:
        """operationId when declared, the verb and path otherwise."""
        return self.operation_id or self.location

    @classmethod
    def from_document(cls, path: str, method: str, data: dict) -> "Operation":
        return cls(
            path=path,
            method=method,
            operation_id=_text(data.get("operationId")),
            summary=_text(data.get("summary")),
            responses=_mapping(data.get("responses")),
        )


@dataclass(frozen=True)
class ConnectorDefinition:
    """Root of the API descriptor."""
    raw: dict = field(repr=False)
    swagger: Any = None
    info: Info | None = None
    host: str | None = None
    base_path: str | None = None
    paths: dict | None = None
    security_definitions: dict[str, SecurityScheme] | None = None
    operations: tuple[Operation, ...] = ()

    @classmethod
    def from_document(cls, data: dict) -> "ConnectorDefinition":
        """Build the view from a parsed definition tree without modifying it."""
        info = _mapping(data.get("info"))
        paths = _mapping(data.get("paths"))
        security = _mapping(data.get("securityDefinitions"))

        operations = []
        for path_name, path_item in (paths or {}).items():
            path_item = _mapping(path_item)
            if path_item is None:
                continue
            for method, operation in path_item.items():
                if method in HTTP_METHODS and isinstance(operation, dict):
                    operations.append(Operation.from_document(path_name, method, operation))

        return cls(
            raw=data,
            swagger=data.get("swagger"),
            info=Info.from_document(info) if info is not None else None,
            host=_text(data.get("host")),
            base_path=_text(data.get("basePath")),
            paths=paths,
            security_definitions=(
                {key: SecurityScheme.from_document(key, scheme) for key, scheme in security.items()}
                if security is not None
                else None
            ),
            operations=tuple(operations),
        )

    def has_field(self, name: str) -> bool:
        """Whether a top-level field is present with a non-empty value."""
        value = self.raw.get(name)
        return value is not None and value != "" and value is not False

    @property
    def operation_ids(self) -> list[str]:
        return [op.operation_id for op in self.operations if op.operation_id]

    @property
    def api_key_schemes(self) -> list[SecurityScheme]:
        return [s for s in (self.security_definitions or {}).values() if s.is_api_key]
