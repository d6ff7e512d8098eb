"""Typed model of an OpenAPI descriptor.

Only the parts the generator reads are modelled:
- paths, with per-method operations split out of each path item
- parameters, request bodies, responses and security requirements
- component schemas as a tagged union (ref / object / array / scalar)
- component security schemes

Parameter and body schemas are kept as opaque mappings; only component
schemas (and the properties/items nested in them) are typed.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)

# Path item keys that hold operations; everything else is path-level metadata
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

SecurityRequirement = dict[str, list[str]]


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # A blank YAML value (`description:`) means the same as an absent key
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


def _none_to_empty(value: Any, empty: Any) -> Any:
    return empty if value is None else value


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class RefSchema(_Model):
    """A ``$ref`` pointer to a reusable schema."""

    kind: Literal["ref"] = "ref"
    ref: str = Field(alias="$ref")


class ObjectSchema(_Model):
    """``type: object``. ``properties`` is None when the key is absent."""

    kind: Literal["object"] = "object"
    properties: dict[str, Schema] | None = None
    required: list[str] = Field(default_factory=list)

    @field_validator("required", mode="before")
    @classmethod
    def _required_names(cls, value: Any) -> Any:
        # Swagger 2 style `required: true` on a property is not a name list
        if not isinstance(value, list):
            return []
        return [name for name in value if isinstance(name, (str, int))]


class ArraySchema(_Model):
    """``type: array``."""

    kind: Literal["array"] = "array"
    items: Schema | None = None


class ScalarSchema(_Model):
    """Any other ``type`` keyword, or none at all."""

    kind: Literal["scalar"] = "scalar"
    type: str | list[str] | None = None


def _schema_kind(value: Any) -> str:
    if isinstance(value, dict):
        if "$ref" in value:
            return "ref"
        if value.get("type") == "object":
            return "object"
        if value.get("type") == "array":
            return "array"
        return "scalar"
    return getattr(value, "kind", "scalar")


Schema = Annotated[
    Union[
        Annotated[RefSchema, Tag("ref")],
        Annotated[ObjectSchema, Tag("object")],
        Annotated[ArraySchema, Tag("array")],
        Annotated[ScalarSchema, Tag("scalar")],
    ],
    Discriminator(_schema_kind),
]

ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class Parameter(_Model):
    """A parameter declaration. Unknown keys (``$ref``, ``style``...) are kept."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    location: str = Field(default="", alias="in")
    required: bool = False
    description: str = ""
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")


class MediaType(_Model):
    model_config = ConfigDict(extra="allow")

    schema_: dict[str, Any] | None = Field(default=None, alias="schema")


class RequestBody(_Model):
    required: bool = False
    description: str = ""
    content: dict[str, MediaType] | None = None


class Operation(_Model):
    summary: str = ""
    description: str = ""
    operation_id: str | None = Field(default=None, alias="operationId")
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Any] = Field(default_factory=dict)
    security: list[SecurityRequirement] | None = None

    @field_validator("responses", mode="before")
    @classmethod
    def _status_codes_as_str(cls, value: Any) -> Any:
        # YAML reads bare status codes (200:) as integers
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value


class PathItem(_Model):
    """Operations keyed by lower-case method, plus shared path-level fields."""

    summary: str = ""
    description: str = ""
    parameters: list[Parameter] = Field(default_factory=list)
    operations: dict[str, Operation] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_operations(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "operations" in data:
            return data
        fields: dict[str, Any] = {}
        operations: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(key, str) and key.lower() in HTTP_METHODS:
                operations[key.lower()] = _none_to_empty(value, {})
            else:
                fields[key] = value
        fields["operations"] = operations
        return fields


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class SecurityScheme(_Model):
    """A declared authentication scheme. ``name``, ``in``, ``flows``... are kept."""

    model_config = ConfigDict(extra="allow")

    type: str = ""
    description: str = ""


class Components(_Model):
    schemas: dict[str, Schema] = Field(default_factory=dict)
    security_schemes: dict[str, SecurityScheme] = Field(
        default_factory=dict, alias="securitySchemes",
    )


class Info(_Model):
    title: str = ""
    version: str = ""


class Descriptor(_Model):
    """The root API description document."""

    info: Info = Field(default_factory=Info)
    paths: dict[str, PathItem] = Field(default_factory=dict)
    components: Components = Field(default_factory=Components)

    @field_validator("paths", mode="before")
    @classmethod
    def _empty_paths(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {path: _none_to_empty(item, {}) for path, item in value.items()}
        return _none_to_empty(value, {})

    def operations(self) -> list[tuple[str, str, Operation]]:
        """Every (path, method, operation) triple in declaration order."""
        return [
            (path, method, operation)
            for path, item in self.paths.items()
            for method, operation in item.operations.items()
        ]
