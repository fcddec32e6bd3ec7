from datetime import date
from pathlib import Path

import pytest

from request_export.entities.base import NoPayload, RawEncoding, RawPayload
from request_export.entities.detect import detect_format
from request_export.entities.loader import load_endpoint, load_request_file, parse_endpoint

FIXTURES = Path(__file__).parent / "fixtures"


class TestDetectFormat:
    def test_detect_request_yaml(self):
        assert detect_format(FIXTURES / "create_user.yaml") == "request"

    def test_detect_postman(self):
        assert detect_format(FIXTURES / "sample.postman.json") == "postman"

    def test_unparseable_falls_back_to_request(self, tmp_path):
        f = tmp_path / "req.yaml"
        f.write_text("key: [unclosed\n")
        assert detect_format(f) == "request"


class TestLoadRequestFile:
    def test_single_request(self):
        endpoints = load_request_file(FIXTURES / "create_user.yaml")
        assert len(endpoints) == 1
        item = endpoints[0]
        assert item.name == "Create user"
        assert item.endpoint.method == "post"
        assert [h.name for h in item.endpoint.headers] == ["Content-Type", "Accept"]
        assert isinstance(item.endpoint.body, RawPayload)
        assert item.endpoint.body.encoding == RawEncoding.JSON
        assert b'"Jane Doe"' in item.endpoint.body.content

    def test_request_list(self):
        endpoints = load_request_file(FIXTURES / "collection.yaml")
        assert [e.name for e in endpoints] == ["List users", "Health"]
        listing = endpoints[0].endpoint
        assert listing.params[0].value == "1"
        assert listing.headers[1].active is False
        health = endpoints[1].endpoint
        assert health.method == "GET"
        assert isinstance(health.body, NoPayload)

    def test_load_endpoint_returns_first(self):
        ep = load_endpoint(FIXTURES / "collection.yaml")
        assert ep.url == "https://api.example.com/users"

    def test_json_file(self, tmp_path):
        f = tmp_path / "req.json"
        f.write_text('{"method": "PUT", "url": "https://example.com/a", "headers": {"A": "1"}}')
        ep = load_endpoint(f)
        assert ep.method == "PUT"
        assert ep.headers[0].value == "1"

    def test_unnamed_requests_named_after_file(self, tmp_path):
        f = tmp_path / "ping.yaml"
        f.write_text("- url: https://a.example.com\n- url: https://b.example.com\n")
        assert [e.name for e in load_request_file(f)] == ["ping #1", "ping #2"]

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("url: [unclosed\n")
        with pytest.raises(ValueError, match="bad.yaml"):
            load_request_file(f)

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "scalar.yaml"
        f.write_text("just text\n")
        with pytest.raises(ValueError, match="expected a request mapping"):
            load_request_file(f)

    def test_malformed_body(self, tmp_path):
        f = tmp_path / "body.yaml"
        f.write_text("url: https://example.com\nbody:\n  kind: telepathy\n")
        with pytest.raises(ValueError, match="malformed"):
            load_request_file(f)

    def test_empty_list(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("requests: []\n")
        with pytest.raises(ValueError, match="no requests"):
            load_request_file(f)


class TestParseEndpoint:
    def test_string_body_json(self):
        ep = parse_endpoint({"url": "https://example.com", "body": '{"a": 1}'})
        assert ep.body.encoding == RawEncoding.JSON

    def test_string_body_plain(self):
        ep = parse_endpoint({"url": "https://example.com", "body": "hello"})
        assert ep.body.encoding == RawEncoding.PLAIN
        assert ep.body.content == b"hello"

    def test_structured_body_becomes_json(self):
        ep = parse_endpoint({"url": "https://example.com", "body": {"name": "Jane"}})
        assert isinstance(ep.body, RawPayload)
        assert ep.body.content == b'{"name": "Jane"}'

    def test_structured_body_with_dates(self):
        ep = parse_endpoint({"url": "https://example.com", "body": {"when": date(2024, 1, 1)}})
        assert ep.body.content == b'{"when": "2024-01-01"}'

    def test_yaml_date_body_file(self, tmp_path):
        f = tmp_path / "dated.yaml"
        f.write_text("url: https://example.com\nbody:\n  when: 2024-01-01\n")
        ep = load_endpoint(f)
        assert ep.body.content == b'{"when": "2024-01-01"}'

    def test_defaults(self):
        ep = parse_endpoint({})
        assert ep.method == "GET"
        assert ep.url == ""
        assert ep.headers == []
