"""Curl exporter — renders a bound request as a POSIX shell command.

Output shape::

    curl -X POST https://api.example.com/users \\
      -H 'Accept: application/json' \\
      -H 'Content-Type: application/json' \\
      -d '{"name":"Jane"}'

Header clauses are sorted by name so that exporting an unchanged endpoint
always yields byte-identical text. Raw bodies are only emitted when they
parse as JSON; anything else (plain text, XML, binary, form payloads) is
left out of the command without raising.
"""

import json
import logging

from request_export.client import BoundRequest, bind
from request_export.entities.base import EndpointData, RawPayload
from request_export.exporter.base import Exporter, shell_quote

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "curl"
CONTINUATION = " \\\n"
INDENT = "  "


class CurlExporter(Exporter):
    """Exports endpoints as curl command lines."""

    name = "curl"

    def __init__(self, command: str = DEFAULT_COMMAND):
        self.command = command

    def generate(self, endpoint: EndpointData) -> str:
        """Bind the endpoint and render it as a curl command.

        Raises:
            RequestError: Binding failed; nothing is rendered.
        """
        request = bind(endpoint)
        command = f"{self.command} -X {request.method.value} {request.url}"

        headers = self._header_clauses(request)
        if headers:
            command += CONTINUATION + CONTINUATION.join(headers)

        body = self._body_clause(request)
        if body:
            command += CONTINUATION + body

        return command

    def _header_clauses(self, request: BoundRequest) -> list[str]:
        return [
            f"{INDENT}-H '{shell_quote(name)}: {shell_quote(request.headers[name])}'"
            for name in sorted(request.headers)
        ]

    def _body_clause(self, request: BoundRequest) -> str:
        # TODO: serialize urlencoded and multipart payloads with --data-urlencode / -F.
        payload = request.payload
        if not isinstance(payload, RawPayload) or not payload.content:
            return ""
        body = compact_json(payload.content)
        if body is None:
            logger.debug("Raw %s body is not JSON, leaving it out", payload.encoding.value)
            return ""
        return f"{INDENT}-d '{shell_quote(body)}'"


def compact_json(content: bytes) -> str | None:
    """Re-serialize JSON content compactly with sorted keys.

    Returns None when the content is not valid JSON. NaN, Infinity and
    numbers overflowing to infinity are rejected, as is nesting too deep
    to decode.
    """
    text = content.decode("utf-8", errors="replace")
    try:
        value = json.loads(text, parse_constant=_reject_constant)
        return json.dumps(
            value, separators=(",", ":"), sort_keys=True, ensure_ascii=False, allow_nan=False
        )
    except (ValueError, RecursionError):
        return None


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def generate(endpoint: EndpointData) -> str:
    """Export an endpoint with the default curl exporter."""
    return CurlExporter().generate(endpoint)
