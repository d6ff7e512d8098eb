"""Shared fixtures: a small descriptor covering every shape the generator reads."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


_DOC: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Users API", "version": "1.2.0"},
    "paths": {
        "/users": {
            "description": "User collection",
            "parameters": [
                {"name": "X-Tenant", "in": "header", "required": True, "schema": {"type": "string"}},
            ],
            "get": {
                "summary": "List users",
                "operationId": "listUsers",
                "tags": ["users"],
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer"}},
                    {"name": "session", "in": "cookie", "schema": {"type": "string"}},
                ],
                "responses": {"200": {"description": "OK"}},
                "security": [{"bearerAuth": []}],
            },
            "post": {
                "summary": "Create user",
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/User"}},
                        "application/xml": {"schema": {"$ref": "#/components/schemas/User"}},
                    },
                },
                "responses": {"201": {"description": "Created"}},
                "security": [{"bearerAuth": [], "apiKeyAuth": []}],
            },
        },
        "/users/{id}": {
            "parameters": [
                {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
            ],
            "get": {
                "summary": "Get user",
                "parameters": [
                    {"name": "expand", "in": "query", "schema": {"type": "boolean"}},
                    {"name": "trace", "in": "body"},
                ],
                "responses": {"200": {"description": "OK"}, "default": {"description": "Error"}},
            },
            "post": {
                "description": "Replace user",
                "requestBody": {
                    "content": {
                        "application/xml": {"schema": {"$ref": "#/components/schemas/User"}},
                    },
                },
                "security": [],
            },
        },
        "/health": {
            "get": {"responses": {"200": {"description": "OK"}}},
        },
    },
    "components": {
        "schemas": {
            "User": {
                "type": "object",
                "properties": {
                    "id": {"type": "string"},
                    "tags": {"type": "array", "items": {"type": "string"}},
                    "address": {"$ref": "#/components/schemas/Address"},
                    "friends": {"type": "array", "items": {"$ref": "#/components/schemas/User"}},
                },
                "required": ["id"],
            },
            "Address": {
                "type": "object",
                "properties": {
                    "street": {"type": "string"},
                    "zip": {"type": "integer"},
                },
                "required": ["street", "zip"],
            },
            "Status": {"type": "string", "enum": ["active", "disabled"]},
            "Bare": {"type": "object"},
            "Empty": {"type": "object", "properties": {}},
        },
        "securitySchemes": {
            "bearerAuth": {"type": "http", "scheme": "bearer", "description": "JWT bearer token"},
            "apiKeyAuth": {"type": "apiKey", "in": "header", "name": "X-Api-Key"},
            "oauth": {"type": "oauth2", "flows": {}},
        },
    },
    "security": [{"apiKeyAuth": []}],
}


@pytest.fixture
def doc() -> dict[str, Any]:
    """A fresh copy of the raw descriptor mapping."""
    return copy.deepcopy(_DOC)


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES / "petstore.yaml"
