"""Unit tests for document loading."""

import json

import pytest

from conval.errors import DocumentLoadError
from conval.loader import load_document, load_manifest, load_script
from conval.profiles import CLAUDE, GEMINI


class TestLoadDocument:
    """Test single document loading."""

    def test_load_object(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"swagger": "2.0", "paths": {}}), encoding="utf-8")

        assert load_document(path) == {"swagger": "2.0", "paths": {}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DocumentLoadError, match="file not found"):
            load_document(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text("{ invalid json", encoding="utf-8")

        with pytest.raises(DocumentLoadError) as exc_info:
            load_document(path)

        assert exc_info.value.path == path
        assert "invalid JSON" in exc_info.value.reason

    def test_root_must_be_object(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text('"just a string"', encoding="utf-8")

        with pytest.raises(DocumentLoadError, match="got str"):
            load_document(path)

    def test_no_defaulting(self, tmp_path):
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"info": {}, "host": ""}), encoding="utf-8")

        assert load_document(path) == {"info": {}, "host": ""}


class TestLoadScript:
    def test_missing_script_is_none(self, tmp_path):
        assert load_script(tmp_path / "script.csx") is None

    def test_read_script(self, tmp_path):
        (tmp_path / "script.csx").write_text("AskGemini", encoding="utf-8")
        assert load_script(tmp_path / "script.csx") == "AskGemini"


class TestLoadManifest:
    """Test loading a connector directory."""

    def test_load_claude(self, write_connector, claude_definition, claude_properties):
        connector_dir = write_connector("claude", claude_definition, claude_properties)

        manifest = load_manifest(connector_dir, CLAUDE)

        assert manifest.name == "claude"
        assert manifest.definition.host == "api.anthropic.com"
        assert manifest.properties.publisher == "Example Publisher"
        assert manifest.script is None
        assert manifest.script_file is None

    def test_load_gemini_with_script(self, write_connector, gemini_documents):
        definition, properties, script = gemini_documents
        connector_dir = write_connector("gemini", definition, properties, script=script)

        manifest = load_manifest(connector_dir, GEMINI)

        assert manifest.script == script
        assert manifest.script_file == "script.csx"

    def test_missing_properties_is_fatal(self, tmp_path, claude_definition):
        connector_dir = tmp_path / "claude"
        connector_dir.mkdir()
        (connector_dir / "claude-connector.json").write_text(json.dumps(claude_definition), encoding="utf-8")

        with pytest.raises(DocumentLoadError, match="apiProperties.json"):
            load_manifest(connector_dir, CLAUDE)
