"""Tests for template rendering and file output."""

import json

from apigen.codegen import (
    generate,
    generate_api_client,
    generate_typescript_interfaces,
    render_interfaces,
)
from apigen.context_builder import build_context
from apigen.schema_parser import InterfaceDecl, InterfaceField


class TestInterfaces:
    """Test interface text output."""

    def test_user_block(self):
        doc = {"components": {"schemas": {"User": {
            "type": "object",
            "properties": {
                "id": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["id"],
        }}}}
        assert generate_typescript_interfaces(doc) == [
            "interface User {\n  id: string;\n  tags?: string[];\n}",
        ]

    def test_one_block_per_object_schema(self, doc):
        blocks = generate_typescript_interfaces(doc)
        assert [b.splitlines()[0] for b in blocks] == [
            "interface User {",
            "interface Address {",
            "interface Empty {",
        ]

    def test_ref_fields(self, doc):
        user = generate_typescript_interfaces(doc)[0]
        assert "  address?: Address;" in user
        assert "  friends?: User[];" in user

    def test_empty_interface(self, doc):
        assert generate_typescript_interfaces(doc)[2] == "interface Empty {\n}"

    def test_render_module(self):
        decls = [
            InterfaceDecl(name="A", fields=[InterfaceField(name="x", type="number", optional=False)]),
            InterfaceDecl(name="B"),
        ]
        assert render_interfaces(decls) == "interface A {\n  x: number;\n}\n\ninterface B {\n}\n"

    def test_render_nothing(self):
        assert render_interfaces([]) == ""

    def test_non_identifier_property_names_quoted(self):
        doc = {"components": {"schemas": {"A": {
            "type": "object",
            "properties": {"first-name": {"type": "string"}, "@type": {"type": "string"}},
            "required": ["@type"],
        }}}}
        assert generate_typescript_interfaces(doc) == [
            "interface A {\n  'first-name'?: string;\n  '@type': string;\n}",
        ]

    def test_type_names_sanitized(self):
        doc = {"components": {"schemas": {
            "My-Type": {"type": "object", "properties": {"x": {"type": "string"}}},
            "1Up": {"type": "object", "properties": {
                "mine": {"$ref": "#/components/schemas/My-Type"},
                "all": {"type": "array", "items": {"$ref": "#/components/schemas/My-Type"}},
            }},
        }}}
        blocks = generate_typescript_interfaces(doc)
        assert blocks[0].splitlines()[0] == "interface My_Type {"
        assert blocks[1] == "interface _1Up {\n  mine?: My_Type;\n  all?: My_Type[];\n}"


class TestClient:
    """Test client text output."""

    def test_constructor_and_request(self, doc):
        code = generate_api_client(doc)
        assert "export class ApiClient {" in code
        assert "constructor(baseUrl: string, headers: Record<string, string> = {}) {" in code
        assert "private async request<T>(" in code
        assert "url: `${this.baseUrl}${path}`," in code
        assert "headers: { ...this.headers, ...headers }" in code

    def test_one_method_per_operation(self, doc):
        code = generate_api_client(doc)
        for name in ("getUsers", "postUsers", "getUsersId", "postUsersId", "getHealth"):
            assert code.count(f"  async {name}(") == 1

    def test_forwards_literal_path(self, doc):
        code = generate_api_client(doc)
        assert "      'POST',\n      '/users/{id}',\n      params," in code

    def test_class_name(self, doc):
        assert "export class UsersClient {" in generate_api_client(doc, class_name="UsersClient")

    def test_quote_in_path_escaped(self):
        code = generate_api_client({"paths": {"/it's": {"get": {}}}})
        assert "'/it\\'s'," in code

    def test_no_operations(self):
        code = generate_api_client({})
        assert "async " not in code.replace("private async request", "")
        assert code.endswith("}\n")


class TestGenerate:
    """Test writing all outputs to disk."""

    def test_files_written(self, doc, tmp_path):
        written = generate(build_context(doc), tmp_path / "out")
        assert sorted(p.name for p in written) == [
            "client.ts", "endpoints.json", "interfaces.ts", "security.json",
        ]
        assert all(p.exists() for p in written)

    def test_file_contents(self, doc, tmp_path):
        generate(build_context(doc), tmp_path)
        assert (tmp_path / "interfaces.ts").read_text().startswith("interface User {\n  id: string;\n")
        assert "async getUsersId(" in (tmp_path / "client.ts").read_text()

        endpoints = json.loads((tmp_path / "endpoints.json").read_text())
        assert endpoints["/users"]["methods"] == ["GET", "POST"]

        security = json.loads((tmp_path / "security.json").read_text())
        assert security["auth_types"] == ["apiKey", "http", "oauth2"]
        assert {"path": "/health", "method": "GET"} in security["unsecured"]
