"""Document loading for connector directories.

Both documents must parse to a JSON object. Any read or parse failure is
fatal: no rule can run without the document trees, so the error is raised
as DocumentLoadError rather than reported as a diagnostic.
"""

import json
import logging
from pathlib import Path

from conval.config import ConnectorProfile
from conval.errors import DocumentLoadError
from conval.models import ConnectorManifest

logger = logging.getLogger(__name__)


def load_document(path: Path) -> dict:
    """Read and parse one JSON document.

    Args:
        path: Path to the document

    Returns:
        The parsed tree, untouched

    Raises:
        DocumentLoadError: If the file cannot be read, is not valid JSON,
            or its root is not an object
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.error(f"Document not found: {path}")
        raise DocumentLoadError(path, "file not found")
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        raise DocumentLoadError(path, f"invalid JSON: {e}")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise DocumentLoadError(path, f"failed to read: {e}")

    if not isinstance(data, dict):
        raise DocumentLoadError(path, f"root must be a JSON object, got {type(data).__name__}")

    logger.debug(f"Loaded {path}")
    return data


def load_script(path: Path) -> str | None:
    """Read a companion script, or None when it does not exist."""
    if not path.exists():
        logger.debug(f"Companion script not present: {path}")
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise DocumentLoadError(path, f"failed to read: {e}")


def load_manifest(connector_dir: Path, profile: ConnectorProfile) -> ConnectorManifest:
    """Load the documents a profile names from a connector directory."""
    connector_dir = Path(connector_dir)

    definition = load_document(connector_dir / profile.definition_file)
    properties = load_document(connector_dir / profile.properties_file)

    script = None
    script_file = None
    if profile.script is not None:
        script_file = profile.script.file
        script = load_script(connector_dir / script_file)

    return ConnectorManifest.from_documents(
        definition,
        properties,
        script=script,
        connector_dir=connector_dir,
        script_file=script_file,
    )
