"""Render templates and write generated output.

Takes the context from context_builder and produces, under the output
directory:
  interfaces.ts   one interface per object schema
  client.ts       the API client class
  endpoints.json  the endpoint index
  security.json   the security report
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jinja2

from .context_builder import (
    DEFAULT_CLIENT_NAME,
    build_client_context,
    get_available_endpoints,
)
from .loader import as_descriptor
from .models import Descriptor
from .schema_parser import InterfaceDecl, build_interfaces

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
OUTPUT_DIR = Path("generated")


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_interface(decl: InterfaceDecl, env: jinja2.Environment | None = None) -> str:
    """Render one declaration as 'interface Name {\\n  field?: type;\\n}'."""
    template = (env or _environment()).get_template("interface.ts.j2")
    return template.render(decl=decl).rstrip("\n")


def render_interfaces(decls: list[InterfaceDecl]) -> str:
    """Render all declarations as one module, separated by blank lines."""
    env = _environment()
    blocks = [render_interface(decl, env) for decl in decls]
    return "\n\n".join(blocks) + "\n" if blocks else ""


def render_client(context: dict[str, Any]) -> str:
    """Render client.ts.j2 with a context from build_client_context."""
    template = _environment().get_template("client.ts.j2")
    return template.render(**context)


def generate_typescript_interfaces(spec: Descriptor | dict[str, Any]) -> list[str]:
    """Return one interface text block per object schema in the descriptor."""
    env = _environment()
    return [render_interface(decl, env) for decl in build_interfaces(spec)]


def generate_api_client(
    spec: Descriptor | dict[str, Any],
    strict: bool = False,
    class_name: str = DEFAULT_CLIENT_NAME,
) -> str:
    """Return the client module text for every operation in the descriptor."""
    endpoints = get_available_endpoints(as_descriptor(spec))
    return render_client(build_client_context(endpoints, strict=strict, class_name=class_name))


def _dump_json(value: Any) -> str:
    return json.dumps(value, indent=2) + "\n"


def generate(context: dict[str, Any], output_dir: Path | None = None) -> list[Path]:
    """Write all generated files for a context from build_context."""
    out = Path(output_dir) if output_dir is not None else OUTPUT_DIR
    out.mkdir(parents=True, exist_ok=True)

    outputs = {
        "interfaces.ts": render_interfaces(context["interfaces"]),
        "client.ts": render_client(context["client"]),
        "endpoints.json": _dump_json({
            path: entry.model_dump(mode="json", by_alias=True)
            for path, entry in context["endpoints"].items()
        }),
        "security.json": _dump_json(context["security"].model_dump(mode="json")),
    }

    written = []
    for filename, content in outputs.items():
        output_path = out / filename
        output_path.write_text(content, encoding="utf-8")
        written.append(output_path)

    logger.info(
        "Generated %s (%d interfaces, %d client methods)",
        out,
        len(context["interfaces"]),
        context["client"]["method_count"],
    )
    return written
