"""Summarize declared security schemes and which operations require them.

Only operation-level ``security`` is consulted; a document-level default
requirement does not make an operation secured.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, field_serializer

from .loader import as_descriptor
from .models import Descriptor, SecurityRequirement

logger = logging.getLogger(__name__)


class OperationRef(BaseModel):
    path: str
    method: str


class SecuredOperation(OperationRef):
    security: list[SecurityRequirement]


class SchemeDetail(BaseModel):
    type: str
    description: str = ""
    requirements: list[OperationRef] = Field(default_factory=list)


class SecurityReport(BaseModel):
    auth_types: set[str] = Field(default_factory=set)
    secured: list[SecuredOperation] = Field(default_factory=list)
    unsecured: list[OperationRef] = Field(default_factory=list)
    schemes: dict[str, SchemeDetail] = Field(default_factory=dict)

    @field_serializer("auth_types", when_used="json")
    def _sorted_auth_types(self, auth_types: set[str]) -> list[str]:
        return sorted(auth_types)


def analyze_security_schemes(spec: Descriptor | dict[str, Any]) -> SecurityReport:
    """Partition operations into secured/unsecured and describe each scheme."""
    descriptor = as_descriptor(spec)
    declared = descriptor.components.security_schemes

    auth_types = {scheme.type for scheme in declared.values()}
    schemes = {
        name: SchemeDetail(type=scheme.type, description=scheme.description)
        for name, scheme in declared.items()
    }

    secured: list[SecuredOperation] = []
    unsecured: list[OperationRef] = []
    for path, method, operation in descriptor.operations():
        if not operation.security:
            unsecured.append(OperationRef(path=path, method=method.upper()))
            continue

        secured.append(
            SecuredOperation(path=path, method=method.upper(), security=operation.security)
        )
        referenced = dict.fromkeys(
            name for requirement in operation.security for name in requirement
        )
        for name in referenced:
            if name in schemes:
                schemes[name].requirements.append(OperationRef(path=path, method=method.upper()))
            else:
                logger.debug("%s %s requires undeclared scheme %s", method.upper(), path, name)

    return SecurityReport(
        auth_types=auth_types,
        secured=secured,
        unsecured=unsecured,
        schemes=schemes,
    )
