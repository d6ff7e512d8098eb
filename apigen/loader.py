"""Load an API descriptor from disk and validate it into the typed model.

Reads JSON or YAML (JSON is a subset of YAML, so one parser covers both).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import DescriptorError
from .models import Descriptor

logger = logging.getLogger(__name__)

SPEC_PATH = Path("spec") / "openapi.json"


def read_document(path: Path | None = None) -> dict[str, Any]:
    """Read the raw descriptor mapping from disk."""
    spec_file = Path(path) if path is not None else SPEC_PATH
    try:
        text = spec_file.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorError(f"Cannot read {spec_file}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptorError(f"Cannot parse {spec_file}: {e}") from e

    if not isinstance(data, dict):
        raise DescriptorError(f"{spec_file} does not contain a mapping at the top level")
    return data


def as_descriptor(document: Descriptor | dict[str, Any]) -> Descriptor:
    """Validate a raw mapping into a Descriptor; Descriptors pass through."""
    if isinstance(document, Descriptor):
        return document
    try:
        return Descriptor.model_validate(document)
    except ValidationError as e:
        raise DescriptorError(f"Invalid descriptor: {e}") from e


def load_descriptor(path: Path | None = None) -> Descriptor:
    """Load and validate the descriptor at ``path`` (default: spec/openapi.json)."""
    descriptor = as_descriptor(read_document(path))
    logger.debug(
        "Loaded descriptor %r: %d paths, %d schemas",
        descriptor.info.title,
        len(descriptor.paths),
        len(descriptor.components.schemas),
    )
    return descriptor
