from unittest.mock import patch

from request_export.entities.base import EndpointData, RawEncoding, RawPayload
from request_export.exporter.base import Exporter
from request_export.exporter.curl import CurlExporter
from request_export.exporter.envelope import (
    EXPORTERS,
    CurlExport,
    ExportKind,
    NoExport,
    from_export_type,
    to_export_type,
)


class TestToExportType:
    def test_wraps_clone(self):
        ep = EndpointData(url="https://example.com", headers={"A": "1"})
        envelope = to_export_type(ep)
        assert isinstance(envelope, CurlExport)
        assert envelope.endpoint == ep
        assert envelope.endpoint is not ep

        ep.url = "https://changed.example.com"
        assert envelope.endpoint.url == "https://example.com"

    def test_none_kind(self):
        assert isinstance(to_export_type(EndpointData(), ExportKind.NONE), NoExport)


class TestFromExportType:
    def test_curl_export(self):
        envelope = to_export_type(EndpointData(method="POST", url="https://example.com"))
        assert from_export_type(envelope) == "curl -X POST https://example.com"

    def test_no_export(self):
        assert from_export_type(NoExport()) is None

    def test_failure_yields_none(self):
        envelope = to_export_type(EndpointData(url="not a url"))
        assert from_export_type(envelope) is None

    def test_unexportable_body_keeps_command(self):
        ep = EndpointData(
            method="POST",
            url="https://example.com",
            body=RawPayload(encoding=RawEncoding.JSON, content=b"[" * 100000),
        )
        assert from_export_type(to_export_type(ep)) == "curl -X POST https://example.com"

    def test_dispatches_through_registry(self):
        class EchoExporter(Exporter):
            name = "echo"

            def generate(self, endpoint):
                return endpoint.url

        with patch.dict(EXPORTERS, {ExportKind.CURL: EchoExporter()}):
            envelope = to_export_type(EndpointData(url="https://example.com"))
            assert from_export_type(envelope) == "https://example.com"

    def test_registry_has_curl(self):
        assert isinstance(EXPORTERS[ExportKind.CURL], CurlExporter)

    def test_envelope_round_trips_through_json(self):
        envelope = to_export_type(EndpointData(url="https://example.com"))
        restored = CurlExport.model_validate_json(envelope.model_dump_json())
        assert from_export_type(restored) == from_export_type(envelope)
