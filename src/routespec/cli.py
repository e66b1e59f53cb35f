"""CLI entry point for routespec."""

import importlib
import logging
from pathlib import Path

import click

from routespec.config import GeneratorConfig
from routespec.engine.merge import merge, sort_schemas
from routespec.errors import RouteSpecError
from routespec.pipeline import generate as run_generation
from routespec.schemas import collect_components
from routespec.spec.serializer import detect_format, load_document, write_document
from routespec.tree.loader import load_route_input


def _import_model(spec: str) -> type:
    """Import a class given as 'package.module:ClassName'."""
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise click.BadParameter(f"expected 'module:Class', got {spec!r}", param_hint="--model")
    try:
        module = importlib.import_module(module_name)
        return getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"cannot import {spec!r}: {e}", param_hint="--model") from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
def main(verbose: bool):
    """routespec — reduce route trees into a merged OpenAPI document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output-dir", type=click.Path(file_okay=False, path_type=Path), envvar="ROUTESPEC_OUTPUT_DIR", default=None, help="Directory to write openapi.<format> into.")
@click.option("--format", "fmt", default="yaml", envvar="ROUTESPEC_FORMAT", type=click.Choice(["json", "yaml"]), help="Output document format.")
@click.option("--title", default="Open API Specification", envvar="ROUTESPEC_TITLE", help="Document title.")
@click.option("--description", default=None, envvar="ROUTESPEC_DESCRIPTION", help="Document description.")
@click.option("--version", "doc_version", default="1.0.0", envvar="ROUTESPEC_VERSION", help="Document version.")
@click.option("--save-in-build", is_flag=True, envvar="ROUTESPEC_SAVE_IN_BUILD", help="Write under <build-path>/openapi/.")
@click.option("--build-path", type=click.Path(file_okay=False, path_type=Path), envvar="ROUTESPEC_BUILD_PATH", default=None, help="Build directory.")
@click.option("--module-path", type=click.Path(path_type=Path), envvar="ROUTESPEC_MODULE_PATH", default=None, help="Source path used to find the resources directory.")
@click.option("--model", "models", multiple=True, help="Register a component schema from a Python class, as module:Class.")
@click.option("--disabled", is_flag=True, envvar="ROUTESPEC_DISABLED", help="Skip generation.")
def generate(
    input_path: Path,
    output_dir: Path | None,
    fmt: str,
    title: str,
    description: str | None,
    doc_version: str,
    save_in_build: bool,
    build_path: Path | None,
    module_path: Path | None,
    models: tuple[str, ...],
    disabled: bool,
):
    """Generate (or update) an OpenAPI document from a route input file."""
    config = GeneratorConfig(
        enabled=not disabled,
        title=title,
        description=description,
        version=doc_version,
        format=fmt,
        file_path=output_dir,
        save_in_build=save_in_build,
        build_path=build_path,
        module_path=module_path,
    )

    try:
        click.echo(f"Reading routes from {input_path}...")
        route_input = load_route_input(input_path)
        components = dict(route_input.components)
        components.update(collect_components(_import_model(m) for m in models))
        click.echo(f"Found {len(route_input.routes)} route trees and {len(components)} components.")

        output = run_generation(route_input.routes, components, config)
    except RouteSpecError as e:
        raise click.ClickException(str(e)) from e

    if output is None:
        click.echo("Generation disabled, nothing written.")
    else:
        click.echo(f"OpenAPI document saved to {output}")


@main.command("merge")
@click.argument("existing_path", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("incoming_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Write here instead of overwriting EXISTING_PATH.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Document format.")
def merge_cmd(existing_path: Path, incoming_path: Path, output: Path | None, fmt: str):
    """Merge INCOMING_PATH into EXISTING_PATH."""
    if fmt == "auto":
        fmt = detect_format(incoming_path)

    incoming = load_document(incoming_path, fmt)
    if incoming is None:
        raise click.ClickException(f"Cannot read OpenAPI document {incoming_path}")

    existing = load_document(existing_path, detect_format(existing_path, default=fmt))
    merged = sort_schemas(incoming) if existing is None else merge(existing, incoming)

    target = output or existing_path
    write_document(merged, target, detect_format(target, default=fmt))
    click.echo(f"Merged document saved to {target}")
