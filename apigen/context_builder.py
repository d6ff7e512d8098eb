"""Build the endpoint index and the Jinja2 template contexts.

The endpoint index flattens the descriptor's paths into a per-path,
per-method inventory. The client context derives one method per
(path, method) pair from that index for client.ts.j2.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import NameCollisionError
from .loader import as_descriptor
from .models import Descriptor, Parameter, RequestBody, SecurityRequirement
from .naming import build_method_name, find_name_collisions
from .schema_parser import build_interfaces
from .security import analyze_security_schemes

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_NAME = "ApiClient"


class OperationDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    description: str = ""
    operation_id: str | None = Field(default=None, alias="operationId")
    tags: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: RequestBody | None = Field(default=None, alias="requestBody")
    responses: dict[str, Any] = Field(default_factory=dict)
    security: list[SecurityRequirement] = Field(default_factory=list)


class EndpointEntry(BaseModel):
    """Everything declared under one path."""

    methods: list[str] = Field(default_factory=list)
    parameters: list[Parameter] = Field(default_factory=list)
    description: str = ""
    operations: dict[str, OperationDetail] = Field(default_factory=dict)


class ClientMethod(BaseModel):
    name: str
    http_method: str
    path: str


def get_available_endpoints(spec: Descriptor | dict[str, Any]) -> dict[str, EndpointEntry]:
    """Index every path: its methods, shared parameters and per-method details."""
    descriptor = as_descriptor(spec)
    endpoints: dict[str, EndpointEntry] = {}

    for path, path_item in descriptor.paths.items():
        operations = {
            method: OperationDetail(
                summary=operation.summary,
                description=operation.description,
                operation_id=operation.operation_id,
                tags=operation.tags,
                # Shared parameters first
                parameters=[*path_item.parameters, *operation.parameters],
                request_body=operation.request_body,
                responses=operation.responses,
                security=operation.security or [],
            )
            for method, operation in path_item.operations.items()
        }
        endpoints[path] = EndpointEntry(
            methods=[method.upper() for method in path_item.operations],
            parameters=list(path_item.parameters),
            description=path_item.description,
            operations=operations,
        )

    logger.debug("Indexed %d paths", len(endpoints))
    return endpoints


def build_client_context(
    endpoints: dict[str, EndpointEntry],
    strict: bool = False,
    class_name: str = DEFAULT_CLIENT_NAME,
) -> dict[str, Any]:
    """Build the client.ts.j2 context from an endpoint index.

    Colliding method names are logged and emitted as-is, or raise
    NameCollisionError when ``strict`` is set.
    """
    pairs = [
        (method, path)
        for path, entry in endpoints.items()
        for method in entry.operations
    ]

    collisions = find_name_collisions(pairs)
    if collisions:
        if strict:
            raise NameCollisionError(collisions)
        for name, found in collisions.items():
            logger.warning(
                "Method name %s is generated for %s",
                name,
                ", ".join(f"{m.upper()} {p}" for m, p in found),
            )

    methods = [
        ClientMethod(
            name=build_method_name(method, path),
            http_method=method.upper(),
            path=path,
        )
        for method, path in pairs
    ]

    return {
        "class_name": class_name,
        "methods": methods,
        "method_count": len(methods),
        "collisions": collisions,
    }


def build_context(
    spec: Descriptor | dict[str, Any],
    strict: bool = False,
    class_name: str = DEFAULT_CLIENT_NAME,
) -> dict[str, Any]:
    """Build the full generation context from a descriptor."""
    descriptor = as_descriptor(spec)
    endpoints = get_available_endpoints(descriptor)

    return {
        "title": descriptor.info.title,
        "version": descriptor.info.version or "unknown",
        "endpoints": endpoints,
        "interfaces": build_interfaces(descriptor),
        "client": build_client_context(endpoints, strict=strict, class_name=class_name),
        "security": analyze_security_schemes(descriptor),
    }
