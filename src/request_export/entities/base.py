"""Request entities — the user-editable description of one HTTP call.

Everything here is plain data. An EndpointData may be invalid (empty URL,
unknown method); turning it into something executable is the binder's job.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


class HttpMethod(str, Enum):
    """Closed set of HTTP verbs a request can be bound with."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class RawEncoding(str, Enum):
    """Declared encoding of a raw body."""

    PLAIN = "plain"
    JSON = "json"
    XML = "xml"
    OCTET_STREAM = "octet-stream"


class KeyValueItem(BaseModel):
    """A single editable row (header, query param or form field)."""

    name: str
    value: str = ""
    active: bool = True


class NoPayload(BaseModel):
    kind: Literal["none"] = "none"


class RawPayload(BaseModel):
    """Opaque body bytes with a declared encoding."""

    kind: Literal["raw"] = "raw"
    encoding: RawEncoding = RawEncoding.PLAIN
    content: bytes = b""


class UrlEncodedPayload(BaseModel):
    kind: Literal["urlencoded"] = "urlencoded"
    fields: list[KeyValueItem] = []


class MultipartPayload(BaseModel):
    kind: Literal["multipart"] = "multipart"
    fields: list[KeyValueItem] = []


RequestPayload = Annotated[
    Union[NoPayload, RawPayload, UrlEncodedPayload, MultipartPayload],
    Field(discriminator="kind"),
]


def _rows(value):
    """Accept {name: value} mappings, (name, value) pairs and lists of rows."""
    if value is None:
        return []
    if isinstance(value, dict):
        value = [{"name": k, "value": v} for k, v in value.items()]
    rows = []
    for row in value:
        if isinstance(row, (tuple, list)) and len(row) == 2:
            row = {"name": row[0], "value": row[1]}
        if isinstance(row, dict):
            text = row.get("value")
            row = {**row, "name": str(row.get("name", "")), "value": "" if text is None else str(text)}
        rows.append(row)
    return rows


class EndpointData(BaseModel):
    """A user-authored HTTP endpoint: method, URL, headers, params and body."""

    method: str = "GET"  # free text until bound
    url: str = ""
    headers: list[KeyValueItem] = []
    params: list[KeyValueItem] = []
    body: RequestPayload = Field(default_factory=NoPayload)

    @field_validator("headers", "params", mode="before")
    @classmethod
    def coerce_rows(cls, value):
        return _rows(value)

    def clone(self) -> "EndpointData":
        """Return an independent deep copy, safe to hand to another surface."""
        return self.model_copy(deep=True)
