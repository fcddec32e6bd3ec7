"""Request file loader.

Reads YAML (or JSON) request files into EndpointData models. A file holds
either a single request document, a list of them, or a mapping with a
``requests`` key.
"""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from .base import EndpointData, RawEncoding, RawPayload


class NamedEndpoint(BaseModel):
    """An endpoint together with the name it is shown under."""

    name: str
    endpoint: EndpointData


def load_endpoint(file_path: Path) -> EndpointData:
    """Load the first request of a request file."""
    return load_request_file(file_path)[0].endpoint


def load_request_file(file_path: Path) -> list[NamedEndpoint]:
    """Parse a request file into a list of NamedEndpoint."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"{file_path.name}: not a valid YAML/JSON document ({e})") from e

    if isinstance(doc, dict) and isinstance(doc.get("requests"), list):
        items = doc["requests"]
    elif isinstance(doc, list):
        items = doc
    elif isinstance(doc, dict):
        items = [doc]
    else:
        raise ValueError(f"{file_path.name}: expected a request mapping or a list of requests")

    endpoints = []
    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"{file_path.name}: request #{index} is not a mapping")
        default_name = file_path.stem if len(items) == 1 else f"{file_path.stem} #{index}"
        name = str(item.get("name") or default_name)
        try:
            endpoint = parse_endpoint(item)
        except ValidationError as e:
            raise ValueError(f"{file_path.name}: request {name!r} is malformed\n{e}") from e
        endpoints.append(NamedEndpoint(name=name, endpoint=endpoint))

    if not endpoints:
        raise ValueError(f"{file_path.name}: no requests found")
    return endpoints


def parse_endpoint(data: dict) -> EndpointData:
    """Build an EndpointData from a plain request mapping."""
    return EndpointData(
        method=str(data.get("method") or "GET"),
        url=str(data.get("url") or ""),
        headers=data.get("headers"),
        params=data.get("params"),
        body=_parse_body(data.get("body")),
    )


def _parse_body(body):
    if body is None:
        return {"kind": "none"}
    if isinstance(body, str):
        # Bare string bodies are raw text; JSON is recognised by its first character.
        encoding = RawEncoding.JSON if body.lstrip().startswith(("{", "[")) else RawEncoding.PLAIN
        return RawPayload(encoding=encoding, content=body.encode("utf-8"))
    if isinstance(body, list) or (isinstance(body, dict) and "kind" not in body):
        # Structured YAML body, e.g. ``body: {name: Jane}``.
        # YAML dates and timestamps are written as their ISO text.
        return RawPayload(encoding=RawEncoding.JSON, content=json.dumps(body, default=str).encode("utf-8"))
    return body
