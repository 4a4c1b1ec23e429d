"""Shared fixtures: connector documents and connector directories."""

import copy
import json

import pytest

from conval.models import ConnectorManifest

CLAUDE_DEFINITION = {
    "swagger": "2.0",
    "info": {
        "title": "Claude",
        "description": "Anthropic Claude messages API",
        "version": "1.0.0",
    },
    "host": "api.anthropic.com",
    "basePath": "/",
    "schemes": ["https"],
    "consumes": ["application/json"],
    "produces": ["application/json"],
    "paths": {
        "/v1/messages": {
            "post": {
                "operationId": "CreateMessage",
                "summary": "Create a message",
                "parameters": [{"name": "body", "in": "body", "schema": {"type": "object"}}],
                "responses": {
                    "200": {"description": "OK"},
                    "429": {"description": "Rate limited"},
                },
            }
        },
        "/v1/models": {
            "get": {
                "operationId": "ListModels",
                "summary": "List models",
                "responses": {
                    "200": {"description": "OK"},
                    "401": {"description": "Unauthorized"},
                },
            }
        },
    },
    "securityDefinitions": {
        "api_key": {"type": "apiKey", "in": "header", "name": "x-api-key"},
    },
}

CLAUDE_PROPERTIES = {
    "properties": {
        "connectionParameters": {
            "api_key": {
                "type": "securestring",
                "uiDefinition": {"displayName": "API Key", "constraints": {"required": "true"}},
            }
        },
        "iconBrandColor": "#D97757",
        "publisher": "Example Publisher",
        "policyTemplateInstances": [],
    }
}

GEMINI_DEFINITION = {
    "swagger": "2.0",
    "info": {"title": "Gemini", "version": "1.0.0"},
    "host": "generativelanguage.googleapis.com",
    "basePath": "/v1beta",
    "paths": {
        "/models/{model}:ask": {
            "post": {
                "operationId": "AskGemini",
                "summary": "Ask Gemini a question",
                "responses": {"200": {"description": "OK"}, "400": {"description": "Bad request"}},
            }
        },
        "/models/{model}:generateContent": {
            "post": {
                "operationId": "GenerateContent",
                "summary": "Generate content",
                "responses": {"200": {"description": "OK"}, "429": {"description": "Quota"}},
            }
        },
    },
    "securityDefinitions": {
        "api_key": {"type": "apiKey", "in": "header", "name": "x-goog-api-key"},
    },
}

GEMINI_PROPERTIES = {
    "properties": {
        "connectionParameters": {"gemini_api_key": {"type": "securestring"}},
        "publisher": "Example Publisher",
        "script": "script.csx",
        "scriptOperations": ["AskGemini"],
    }
}

GEMINI_SCRIPT = """public class Script : ScriptBase
{
    public override async Task<HttpResponseMessage> ExecuteAsync()
    {
        if (this.Context.OperationId == "AskGemini")
        {
            var body = new JObject { ["contents"] = new JArray() };
        }
        return await this.Context.SendAsync(this.Context.Request, this.CancellationToken);
    }
}
"""

FORIT_DEFINITION = {
    "swagger": "2.0",
    "info": {"title": "ForIT AI", "version": "1.0"},
    "host": "ai.forit.io",
    "basePath": "/api",
    "paths": {
        "/ask": {"post": {"operationId": "AskAI", "summary": "Ask", "responses": {"200": {}, "401": {}}}},
        "/claude": {"post": {"operationId": "AskClaude", "summary": "Claude", "responses": {"200": {}, "429": {}}}},
        "/gemini": {"post": {"operationId": "AskGemini", "summary": "Gemini", "responses": {"200": {}, "429": {}}}},
        "/license": {"get": {"operationId": "GetLicenseStatus", "summary": "License", "responses": {"200": {}, "403": {}}}},
    },
    "securityDefinitions": {
        "api_key": {"type": "apiKey", "in": "header", "name": "x-forit-license"},
    },
}

FORIT_PROPERTIES = {
    "properties": {
        "connectionParameters": {"api_key": {"type": "securestring"}},
        "publisher": "ForIT",
        "policyTemplateInstances": [
            {
                "templateId": "setheader",
                "title": "License header",
                "parameters": {"x-ms-apimTemplateParameter.name": "x-forit-license"},
            }
        ],
    }
}


@pytest.fixture
def claude_definition():
    return copy.deepcopy(CLAUDE_DEFINITION)


@pytest.fixture
def claude_properties():
    return copy.deepcopy(CLAUDE_PROPERTIES)


@pytest.fixture
def gemini_documents():
    return copy.deepcopy(GEMINI_DEFINITION), copy.deepcopy(GEMINI_PROPERTIES), GEMINI_SCRIPT


@pytest.fixture
def forit_documents():
    return copy.deepcopy(FORIT_DEFINITION), copy.deepcopy(FORIT_PROPERTIES)


@pytest.fixture
def make_manifest():
    """Build a ConnectorManifest straight from document trees."""
    def _make(definition, properties, script=None, script_file=None):
        return ConnectorManifest.from_documents(
            definition, properties, script=script, script_file=script_file
        )
    return _make


@pytest.fixture
def write_connector(tmp_path):
    """Write a connector directory and return its path."""
    def _write(name, definition, properties, definition_file=None, script=None,
               script_file="script.csx", root=None):
        connector_dir = (root or tmp_path) / name
        connector_dir.mkdir(parents=True)
        definition_file = definition_file or f"{name}-connector.json"
        if isinstance(definition, str):
            (connector_dir / definition_file).write_text(definition, encoding="utf-8")
        else:
            with open(connector_dir / definition_file, "w", encoding="utf-8") as f:
                json.dump(definition, f, indent=2)
        if isinstance(properties, str):
            (connector_dir / "apiProperties.json").write_text(properties, encoding="utf-8")
        else:
            with open(connector_dir / "apiProperties.json", "w", encoding="utf-8") as f:
                json.dump(properties, f, indent=2)
        if script is not None:
            (connector_dir / script_file).write_text(script, encoding="utf-8")
        return connector_dir
    return _write
