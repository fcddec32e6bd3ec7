"""Postman Collection v2.1 parser.

Parses Postman exported JSON files into NamedEndpoint models.
"""

import json
from pathlib import Path

from .base import EndpointData, KeyValueItem, MultipartPayload, NoPayload, RawEncoding, RawPayload, UrlEncodedPayload
from .loader import NamedEndpoint

RAW_LANGUAGES = {
    "json": RawEncoding.JSON,
    "xml": RawEncoding.XML,
    "text": RawEncoding.PLAIN,
}


def parse_postman(file_path: Path) -> list[NamedEndpoint]:
    """Parse a Postman Collection v2.1 file into a list of NamedEndpoint."""
    text = file_path.read_text(encoding="utf-8")
    collection = json.loads(text)

    endpoints: list[NamedEndpoint] = []
    _parse_items(collection.get("item", []), endpoints)
    return endpoints


def _parse_items(items: list[dict], endpoints: list[NamedEndpoint]) -> None:
    """Recursively parse items (supports folders)."""
    for item in items:
        if "item" in item:
            _parse_items(item["item"], endpoints)
        elif "request" in item:
            endpoints.append(_parse_request(item))


def _parse_request(item: dict) -> NamedEndpoint:
    req = item["request"]
    if isinstance(req, str):
        # Short form: the request is just a URL.
        req = {"method": "GET", "url": req}

    url = req.get("url", "")
    params: list[KeyValueItem] = []
    if isinstance(url, dict):
        if url.get("raw"):
            # raw already carries the query string
            url = url["raw"]
        else:
            params = _parse_rows(url.get("query", []))
            url = _join_url(url)

    endpoint = EndpointData(
        method=str(req.get("method", "GET")),
        url=url,
        headers=_parse_rows(req.get("header", [])),
        params=params,
        body=_parse_body(req.get("body")),
    )
    return NamedEndpoint(name=item.get("name", ""), endpoint=endpoint)


def _join_url(url: dict) -> str:
    host = url.get("host", [])
    if isinstance(host, list):
        host = ".".join(host)
    path = url.get("path", [])
    if isinstance(path, list):
        path = "/".join(path)
    protocol = url.get("protocol")
    prefix = f"{protocol}://" if protocol else ""
    return f"{prefix}{host}/{path}" if path else f"{prefix}{host}"


def _parse_rows(rows: list[dict]) -> list[KeyValueItem]:
    return [
        KeyValueItem(
            name=str(row.get("key", "")),
            value="" if row.get("value") is None else str(row.get("value")),
            active=not row.get("disabled", False),
        )
        for row in rows
    ]


def _parse_body(body: dict | None):
    if not body:
        return NoPayload()
    mode = body.get("mode")
    if mode == "raw":
        options = body.get("options") or {}
        language = (options.get("raw") or {}).get("language") or "text"
        return RawPayload(
            encoding=RAW_LANGUAGES.get(language, RawEncoding.PLAIN),
            content=(body.get("raw") or "").encode("utf-8"),
        )
    if mode == "urlencoded":
        return UrlEncodedPayload(fields=_parse_rows(body.get("urlencoded") or []))
    if mode == "formdata":
        return MultipartPayload(fields=_parse_rows(body.get("formdata") or []))
    return NoPayload()
