"""Export envelope — moves an endpoint between the editor and the export view.

The export view only sees a RequestExportType, never the editing model.
"""

import logging
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from request_export.entities.base import EndpointData
from request_export.error import RequestError
from request_export.exporter.base import Exporter
from request_export.exporter.curl import CurlExporter

logger = logging.getLogger(__name__)


class ExportKind(str, Enum):
    NONE = "none"
    CURL = "curl"


class NoExport(BaseModel):
    kind: Literal["none"] = "none"


class CurlExport(BaseModel):
    kind: Literal["curl"] = "curl"
    endpoint: EndpointData


RequestExportType = Annotated[Union[NoExport, CurlExport], Field(discriminator="kind")]

EXPORTERS: dict[ExportKind, Exporter] = {
    ExportKind.CURL: CurlExporter(),
}


def to_export_type(endpoint: EndpointData, kind: ExportKind = ExportKind.CURL) -> NoExport | CurlExport:
    """Wrap a snapshot of the endpoint for the given export kind."""
    if kind == ExportKind.NONE:
        return NoExport()
    return CurlExport(endpoint=endpoint.clone())


def from_export_type(export_type: NoExport | CurlExport) -> str | None:
    """Render the envelope, or return None when there is nothing to show.

    Binding failures are not raised here: the caller leaves its text empty.
    """
    if isinstance(export_type, NoExport):
        return None
    exporter = EXPORTERS[ExportKind(export_type.kind)]
    try:
        return exporter.generate(export_type.endpoint)
    except RequestError as exc:
        logger.debug("Export %s failed: %s", export_type.kind, exc)
        return None
