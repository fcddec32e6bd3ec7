"""Binder — validates an EndpointData into an executable BoundRequest.

bind() is a pure function: it never mutates its input and keeps no state
between calls, so it may be called from any thread.
"""

import logging
import re
from urllib.parse import urlencode, urlsplit

from pydantic import BaseModel, ConfigDict

from request_export.entities.base import EndpointData, HttpMethod, KeyValueItem, RequestPayload
from request_export.error import InvalidHeaderError, InvalidUrlError, UnsupportedMethodError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_SCHEME = "http"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
# Bare hosts that get the default scheme: localhost, IPv4, bracketed IPv6 or a dotted name.
_BARE_HOST_RE = re.compile(
    r"^(localhost|\d{1,3}(\.\d{1,3}){3}|\[[0-9A-Fa-f:.]+\]|([A-Za-z0-9-]+\.)+[A-Za-z0-9-]+)"
    r"(:\d+)?([/?#]|$)"
)
# RFC 9110 token characters.
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class BoundRequest(BaseModel):
    """A validated, executable projection of an EndpointData."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    url: str
    headers: dict[str, str]
    payload: RequestPayload


def bind(endpoint: EndpointData) -> BoundRequest:
    """Bind an endpoint into a request an HTTP client can execute.

    Raises:
        InvalidUrlError: The URL is empty, relative or unparseable.
        UnsupportedMethodError: The method is not a supported verb.
        InvalidHeaderError: A header cannot be emitted safely.
    """
    method = bind_method(endpoint.method)
    url = bind_url(endpoint.url)
    url = _append_params(url, endpoint.params)
    headers = bind_headers(endpoint.headers)
    logger.debug("Bound %s %s with %d header(s)", method.value, url, len(headers))
    return BoundRequest(
        method=method,
        url=url,
        headers=headers,
        payload=endpoint.body.model_copy(deep=True),
    )


def bind_method(method: str) -> HttpMethod:
    normalized = (method or "").strip().upper()
    try:
        return HttpMethod(normalized)
    except ValueError:
        raise UnsupportedMethodError(f"Unsupported HTTP method: {method!r}") from None


def bind_url(url: str) -> str:
    """Validate a URL, prepending the default scheme to bare hosts.

    The accepted URL is returned verbatim apart from surrounding whitespace
    and the defaulted scheme.
    """
    text = (url or "").strip()
    if not text:
        raise InvalidUrlError("URL is empty")
    if any(_is_control(ch) or ch.isspace() for ch in text):
        raise InvalidUrlError(f"URL contains whitespace or control characters: {url!r}")

    if not _SCHEME_RE.match(text):
        if not _BARE_HOST_RE.match(text):
            raise InvalidUrlError(f"URL is not absolute: {url!r}")
        logger.debug("No scheme in %r, defaulting to %s://", text, DEFAULT_SCHEME)
        text = f"{DEFAULT_SCHEME}://{text}"

    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError as exc:
        raise InvalidUrlError(f"URL cannot be parsed: {url!r} ({exc})") from None

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidUrlError(f"Unsupported URL scheme: {parts.scheme!r}")
    if not parts.hostname:
        raise InvalidUrlError(f"URL has no host: {url!r}")
    if port == 0:
        raise InvalidUrlError(f"URL has an invalid port: {url!r}")
    return text


def bind_headers(items: list[KeyValueItem]) -> dict[str, str]:
    """Normalize header rows into one value per name.

    Names are compared case-insensitively and the last occurrence wins,
    both for the value and for the spelling of the name. The resulting
    mapping keeps the position where each name first appeared.
    """
    collected: dict[str, tuple[str, str]] = {}
    for item in items:
        if not item.active:
            continue
        name = item.name.strip()
        value = item.value.strip()
        if not name and not value:
            continue
        _check_header(name, value)
        key = name.lower()
        if key in collected:
            logger.debug("Duplicate header %r, keeping the last value", name)
        collected[key] = (name, value)
    return {name: value for name, value in collected.values()}


def _check_header(name: str, value: str) -> None:
    if not name:
        raise InvalidHeaderError(f"Header with value {value!r} has no name")
    if not _TOKEN_RE.match(name):
        raise InvalidHeaderError(f"Invalid header name: {name!r}")
    if any(_is_control(ch) and ch != "\t" for ch in value):
        raise InvalidHeaderError(f"Header {name!r} contains control characters")


def _append_params(url: str, params: list[KeyValueItem]) -> str:
    pairs = [(p.name.strip(), p.value) for p in params if p.active and p.name.strip()]
    if not pairs:
        return url
    base, sep, fragment = url.partition("#")
    if base.endswith(("?", "&")):
        joiner = ""
    elif "?" in base:
        joiner = "&"
    else:
        joiner = "?"
    return f"{base}{joiner}{urlencode(pairs)}{sep}{fragment}"


def _is_control(ch: str) -> bool:
    return ord(ch) < 0x20 or ord(ch) == 0x7F
