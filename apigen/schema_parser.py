"""Extract parameters, request bodies and interface declarations.

Handles:
- Path-level + method-level parameter merging, grouped by location
- JSON request body lookup (other media types are listed, not resolved)
- Component schemas -> interface declarations
- $ref fields (named by the ref's final segment)
- Arrays of scalars or refs
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import NotFound
from .loader import as_descriptor
from .models import (
    ArraySchema,
    Descriptor,
    ObjectSchema,
    Parameter,
    RefSchema,
    ScalarSchema,
    Schema,
)
from .naming import property_key, ref_name, type_name

logger = logging.getLogger(__name__)

# Parameter locations, in bucket order
PARAMETER_LOCATIONS = ("path", "query", "header", "cookie")

JSON_MEDIA_TYPE = "application/json"

# Rendered when a schema declares no usable type
UNKNOWN_TYPE = "any"


class ParameterGroups(BaseModel):
    """Merged parameters of one operation, one list per location."""

    path: list[Parameter] = Field(default_factory=list)
    query: list[Parameter] = Field(default_factory=list)
    header: list[Parameter] = Field(default_factory=list)
    cookie: list[Parameter] = Field(default_factory=list)


class RequestBodyInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    required: bool = False
    content_types: list[str] = Field(default_factory=list)
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")


class InterfaceField(BaseModel):
    name: str
    type: str
    optional: bool

    @property
    def key(self) -> str:
        return property_key(self.name)


class InterfaceDecl(BaseModel):
    name: str
    fields: list[InterfaceField] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Parameters and request bodies
# ---------------------------------------------------------------------------

def get_request_parameters(
    spec: Descriptor | dict[str, Any],
    path: str,
    method: str,
) -> ParameterGroups:
    """Merge path-level and method-level parameters and group them by location.

    Raises NotFound if the path, or the method under it, is absent.
    """
    descriptor = as_descriptor(spec)
    path_item = descriptor.paths.get(path)
    if path_item is None:
        raise NotFound(path)

    operation = path_item.operations.get(method.lower())
    if operation is None:
        raise NotFound(path, method)

    parameters = [*path_item.parameters, *operation.parameters]
    groups = {
        location: [p for p in parameters if p.location == location]
        for location in PARAMETER_LOCATIONS
    }
    return ParameterGroups(**groups)


def get_request_body_schema(
    spec: Descriptor | dict[str, Any],
    path: str,
    method: str,
) -> RequestBodyInfo | None:
    """Return the request body's media types and JSON schema, or None if there is no body."""
    descriptor = as_descriptor(spec)
    path_item = descriptor.paths.get(path)
    if path_item is None:
        return None

    operation = path_item.operations.get(method.lower())
    if operation is None or operation.request_body is None:
        return None

    body = operation.request_body
    if body.content is None:
        return None

    json_content = body.content.get(JSON_MEDIA_TYPE)
    return RequestBodyInfo(
        required=body.required,
        content_types=list(body.content),
        schema_=json_content.schema_ if json_content is not None else None,
    )


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

def _literal_type(schema: Schema | None) -> str:
    """The schema's own type keyword."""
    if isinstance(schema, ObjectSchema):
        return "object"
    if isinstance(schema, ArraySchema):
        return "array"
    if isinstance(schema, ScalarSchema) and schema.type:
        if isinstance(schema.type, list):
            return " | ".join(schema.type)
        return schema.type
    return UNKNOWN_TYPE


def _item_type(schema: Schema | None) -> str:
    if isinstance(schema, RefSchema):
        return type_name(ref_name(schema.ref))
    item_type = _literal_type(schema)
    if " " in item_type:
        return f"({item_type})"
    return item_type


def resolve_field_type(schema: Schema) -> str:
    """Resolve a property schema to its interface type.

    Precedence: $ref name, then array of the item type, then the literal type.
    """
    if isinstance(schema, RefSchema):
        return type_name(ref_name(schema.ref))
    if isinstance(schema, ArraySchema):
        return f"{_item_type(schema.items)}[]"
    return _literal_type(schema)


def build_interface(name: str, schema: Schema) -> InterfaceDecl | None:
    """Build one interface declaration; None for schemas that are not object+properties."""
    if not isinstance(schema, ObjectSchema) or schema.properties is None:
        return None

    required = set(schema.required)
    fields = [
        InterfaceField(
            name=prop_name,
            type=resolve_field_type(prop_schema),
            optional=prop_name not in required,
        )
        for prop_name, prop_schema in schema.properties.items()
    ]
    return InterfaceDecl(name=type_name(name), fields=fields)


def build_interfaces(spec: Descriptor | dict[str, Any]) -> list[InterfaceDecl]:
    """Build interface declarations for every object schema in components.schemas."""
    descriptor = as_descriptor(spec)
    decls: list[InterfaceDecl] = []
    for name, schema in descriptor.components.schemas.items():
        decl = build_interface(name, schema)
        if decl is None:
            logger.debug("Skipping schema %s: not an object with properties", name)
            continue
        decls.append(decl)
    return decls
