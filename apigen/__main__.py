"""Entry point: python -m apigen

Reads an API descriptor (default spec/openapi.json) and prints or writes
the endpoint index, parameter and body extracts, interfaces, client and
security report.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import click

from .codegen import OUTPUT_DIR, generate, render_client, render_interfaces
from .context_builder import (
    DEFAULT_CLIENT_NAME,
    build_client_context,
    build_context,
    get_available_endpoints,
)
from .errors import ApigenError
from .loader import SPEC_PATH, load_descriptor
from .models import Descriptor
from .schema_parser import build_interfaces, get_request_body_schema, get_request_parameters
from .security import analyze_security_schemes

_DESCRIPTOR_TYPE = click.Path(exists=True, dir_okay=False, path_type=Path)

descriptor_argument = click.argument(
    "descriptor", required=False, default=str(SPEC_PATH), type=_DESCRIPTOR_TYPE,
)
# Commands taking PATH METHOD after the descriptor need it spelled out
required_descriptor_argument = click.argument("descriptor", type=_DESCRIPTOR_TYPE)
strict_option = click.option(
    "--strict-names", is_flag=True, help="Fail when two operations map to the same client method name.",
)
class_name_option = click.option(
    "--class-name", default=DEFAULT_CLIENT_NAME, show_default=True, help="Name of the generated client class.",
)


def _load(path: Path) -> Descriptor:
    try:
        return load_descriptor(path)
    except ApigenError as e:
        raise click.ClickException(str(e)) from e


def _echo_json(value: Any) -> None:
    click.echo(json.dumps(value, indent=2))


def _write_or_echo(text: str, output: Path | None) -> None:
    if output is None:
        click.echo(text, nl=False)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Cannot write {output}: {e}") from e
    click.echo(f"Wrote {output}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def main(verbose: bool) -> None:
    """apigen: endpoint inventories, interfaces, clients and security reports from API descriptors."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@descriptor_argument
def endpoints(descriptor: Path) -> None:
    """Print the endpoint index as JSON."""
    index = get_available_endpoints(_load(descriptor))
    _echo_json({path: entry.model_dump(mode="json", by_alias=True) for path, entry in index.items()})


@main.command()
@required_descriptor_argument
@click.argument("path")
@click.argument("method")
def params(descriptor: Path, path: str, method: str) -> None:
    """Print the parameters of PATH METHOD grouped by location."""
    try:
        groups = get_request_parameters(_load(descriptor), path, method)
    except ApigenError as e:
        raise click.ClickException(str(e)) from e
    _echo_json(groups.model_dump(mode="json", by_alias=True))


@main.command()
@required_descriptor_argument
@click.argument("path")
@click.argument("method")
def body(descriptor: Path, path: str, method: str) -> None:
    """Print the request body of PATH METHOD, or null."""
    info = get_request_body_schema(_load(descriptor), path, method)
    _echo_json(info.model_dump(mode="json", by_alias=True) if info is not None else None)


@main.command()
@descriptor_argument
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write to this file instead of stdout.")
def interfaces(descriptor: Path, output: Path | None) -> None:
    """Generate interface declarations from component schemas."""
    _write_or_echo(render_interfaces(build_interfaces(_load(descriptor))), output)


@main.command()
@descriptor_argument
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Write to this file instead of stdout.")
@strict_option
@class_name_option
def client(descriptor: Path, output: Path | None, strict_names: bool, class_name: str) -> None:
    """Generate the API client class."""
    index = get_available_endpoints(_load(descriptor))
    try:
        context = build_client_context(index, strict=strict_names, class_name=class_name)
    except ApigenError as e:
        raise click.ClickException(str(e)) from e
    _write_or_echo(render_client(context), output)


@main.command()
@descriptor_argument
def security(descriptor: Path) -> None:
    """Print the security report as JSON."""
    report = analyze_security_schemes(_load(descriptor))
    _echo_json(report.model_dump(mode="json"))


@main.command(name="generate")
@descriptor_argument
@click.option(
    "-o", "--output", default=str(OUTPUT_DIR), show_default=True, envvar="APIGEN_OUTPUT_DIR",
    type=click.Path(file_okay=False, path_type=Path), help="Output directory.",
)
@strict_option
@class_name_option
def generate_all(descriptor: Path, output: Path, strict_names: bool, class_name: str) -> None:
    """Write interfaces.ts, client.ts, endpoints.json and security.json."""
    try:
        context = build_context(_load(descriptor), strict=strict_names, class_name=class_name)
    except ApigenError as e:
        raise click.ClickException(str(e)) from e
    try:
        written = generate(context, output)
    except OSError as e:
        raise click.ClickException(f"Cannot write to {output}: {e}") from e
    click.echo(
        f"Generated {len(written)} files in {output} "
        f"({len(context['interfaces'])} interfaces, {context['client']['method_count']} client methods)"
    )


if __name__ == "__main__":
    main()
