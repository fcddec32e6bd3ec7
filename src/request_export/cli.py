"""CLI entry point for request-export."""

import logging
from pathlib import Path

import click

from request_export.client import bind
from request_export.entities.detect import detect_format
from request_export.entities.loader import NamedEndpoint, load_request_file
from request_export.entities.postman import parse_postman
from request_export.error import RequestError
from request_export.exporter.curl import DEFAULT_COMMAND, CurlExporter

FORMATS = ["auto", "request", "postman"]


def load_endpoints(file_path: Path, fmt: str = "auto") -> list[NamedEndpoint]:
    """Load endpoints from a request file based on format."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    if fmt == "postman":
        return parse_postman(file_path)
    return load_request_file(file_path)


def _select(endpoints: list[NamedEndpoint], name: str | None) -> list[NamedEndpoint]:
    if name is None:
        return endpoints
    selected = [e for e in endpoints if e.name == name]
    if not selected:
        raise click.UsageError(f"No request named {name!r}.")
    return selected


def _load(file_path: Path, fmt: str) -> list[NamedEndpoint]:
    try:
        return load_endpoints(file_path, fmt)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log binding and export decisions to stderr.")
def main(verbose: bool):
    """Request Export — bind HTTP request files and export them as curl commands."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the commands to this file instead of stdout.")
@click.option("--name", default=None, help="Only export the request with this name.")
@click.option("--command", "command_name", default=DEFAULT_COMMAND, envvar="REQUEST_EXPORT_COMMAND", show_default=True, help="Command name the export starts with.")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Request file format.")
def export(request_file: Path, output: Path | None, name: str | None, command_name: str, fmt: str):
    """Export the requests of REQUEST_FILE as curl commands."""
    endpoints = _select(_load(request_file, fmt), name)
    exporter = CurlExporter(command=command_name)

    blocks = []
    for item in endpoints:
        try:
            command = exporter.generate(item.endpoint)
        except RequestError as e:
            raise click.ClickException(f"{item.name}: {e}") from e
        if len(endpoints) > 1:
            command = f"# {item.name}\n{command}"
        blocks.append(command)
    text = "\n\n".join(blocks)

    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Exported {len(blocks)} request(s) to {output}", err=True)


@main.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Request file format.")
def check(request_file: Path, fmt: str):
    """Bind every request of REQUEST_FILE and report the ones that fail."""
    failures = 0
    for item in _load(request_file, fmt):
        try:
            request = bind(item.endpoint)
        except RequestError as e:
            failures += 1
            click.echo(f"FAIL {item.name}: {e}")
            continue
        click.echo(f"OK {request.method.value} {request.url}")

    if failures:
        click.get_current_context().exit(1)
