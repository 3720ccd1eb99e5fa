"""Tests for the Figma REST client, using httpx.MockTransport."""
from __future__ import annotations

import json

import httpx
import pytest

from errors import FigmaFetchError
from figma.client import FigmaClient, parse_file_key, parse_node_ids
from figma.worker import FetchWorker


def make_client(handler, **kwargs):
    return FigmaClient("secret-token", transport=httpx.MockTransport(handler), **kwargs)


class TestParseFileKey:

    @pytest.mark.parametrize("value", [
        "https://www.figma.com/file/AbC123/My-Design?node-id=0%3A1",
        "https://www.figma.com/design/AbC123/My-Design",
        "figma.com/proto/AbC123",
        "  AbC123  ",
    ])
    def test_valid(self, value):
        assert parse_file_key(value) == "AbC123"

    @pytest.mark.parametrize("value", ["", "https://example.com/file/x", "not a key!"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_file_key(value)


class TestParseNodeIds:

    def test_share_link_ids_use_colons(self):
        url = "https://www.figma.com/design/AbC123/My-Design?node-id=12-345&t=x"
        assert parse_node_ids(url) == ["12:345"]

    def test_encoded_and_multiple_ids(self):
        assert parse_node_ids("figma.com/file/AbC123?node-id=1%3A2,3-4") == ["1:2", "3:4"]

    @pytest.mark.parametrize("value", ["AbC123", "https://www.figma.com/file/AbC123/x", ""])
    def test_no_ids(self, value):
        assert parse_node_ids(value) == []


class TestFigmaClient:

    def test_token_required(self):
        with pytest.raises(ValueError):
            FigmaClient("  ")

    def test_fetch_file_sends_token(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["token"] = request.headers.get("X-Figma-Token")
            return httpx.Response(200, json={"document": {"children": []}})

        data = make_client(handler).fetch_file("KEY1")
        assert data == {"document": {"children": []}}
        assert seen["url"] == "https://api.figma.com/v1/files/KEY1"
        assert seen["token"] == "secret-token"

    def test_base_url_from_settings(self):
        from settings import get_settings
        get_settings().settings.figma.api_base_url = "https://figma.internal/"
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={})

        make_client(handler).fetch_file("K")
        assert seen == ["https://figma.internal/v1/files/K"]

    def test_fetch_nodes_joins_ids(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["ids"] = request.url.params.get("ids")
            return httpx.Response(200, json={"nodes": {}})

        make_client(handler).fetch_nodes("KEY1", ["1:2", "3:4"])
        assert seen == {"path": "/v1/files/KEY1/nodes", "ids": "1:2,3:4"}

    def test_empty_file_key(self):
        with pytest.raises(ValueError):
            make_client(lambda r: httpx.Response(200, json={})).fetch_file("")

    def test_http_error_carries_status_and_figma_message(self):
        def handler(request):
            return httpx.Response(403, json={"status": 403, "err": "Invalid token"})

        with pytest.raises(FigmaFetchError) as exc:
            make_client(handler).fetch_file("KEY1")
        assert exc.value.status == 403
        assert exc.value.message == "Invalid token"
        assert str(exc.value) == "HTTP 403: Invalid token"

    def test_http_error_without_body_uses_reason(self):
        with pytest.raises(FigmaFetchError) as exc:
            make_client(lambda r: httpx.Response(404)).fetch_file("KEY1")
        assert exc.value.status == 404
        assert exc.value.message == "Not Found"

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FigmaFetchError) as exc:
            make_client(handler).fetch_file("KEY1")
        assert exc.value.status is None
        assert "Could not reach Figma" in str(exc.value)

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>", headers={"content-type": "text/html"})

        with pytest.raises(FigmaFetchError, match="invalid JSON"):
            make_client(handler).fetch_file("KEY1")

    def test_non_object_payload(self):
        def handler(request):
            return httpx.Response(200, content=json.dumps([1, 2]).encode())

        with pytest.raises(FigmaFetchError, match="unexpected payload"):
            make_client(handler).fetch_file("KEY1")


class TestFetchWorker:

    def test_emits_normalized_nodes(self, qapp):
        def handler(request):
            return httpx.Response(200, json={"document": {"children": [
                {"id": "1", "name": "Box", "type": "RECTANGLE"},
            ]}})

        worker = FetchWorker("KEY1", "secret-token", client=make_client(handler))
        results, errors = [], []
        worker.finished.connect(lambda v: results.append(v))
        worker.failed.connect(lambda v: errors.append(v))
        worker.run()

        assert errors == []
        (nodes,) = results
        assert [n.id for n in nodes] == ["1"]

    def test_emits_failure_and_no_nodes(self, qapp):
        worker = FetchWorker("KEY1", "secret-token",
                             client=make_client(lambda r: httpx.Response(500)))
        results, errors = [], []
        worker.finished.connect(lambda v: results.append(v))
        worker.failed.connect(lambda v: errors.append(v))
        worker.run()

        assert results == []
        (msg,) = errors
        assert msg.startswith("HTTP 500: Internal Server Error")

    def test_malformed_document_is_a_failure(self, qapp):
        worker = FetchWorker("KEY1", "secret-token",
                             client=make_client(lambda r: httpx.Response(200, json={"status": 200})))
        errors = []
        worker.failed.connect(lambda v: errors.append(v))
        worker.run()
        assert errors and "does not contain a Figma document" in errors[0]

    def test_node_ids_fetch_only_those_nodes(self, qapp):
        seen = []

        def handler(request):
            seen.append((request.url.path, request.url.params.get("ids")))
            return httpx.Response(200, json={"nodes": {
                "12:345": {"document": {"id": "12:345", "name": "Card", "type": "FRAME"}},
            }})

        worker = FetchWorker("KEY1", "secret-token", client=make_client(handler),
                             node_ids=["12:345"])
        results = []
        worker.finished.connect(lambda v: results.append(v))
        worker.run()

        assert seen == [("/v1/files/KEY1/nodes", "12:345")]
        (nodes,) = results
        assert [n.id for n in nodes] == ["12:345"]
