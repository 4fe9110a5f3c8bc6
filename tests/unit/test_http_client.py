"""Tests for lq_dc.toolkit.http_client using httpx.MockTransport."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from lq_dc.toolkit.http_client import ApiClient, ApiError, RequestConfig, get_api_client


class Recorder:
    """Mock transport handler that remembers every request it sees."""

    def __init__(self, response: httpx.Response | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, json={"ok": True})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self.response


def make_client(handler, **kwargs) -> ApiClient:
    return ApiClient("https://api.example.com/v1", transport=httpx.MockTransport(handler), **kwargs)


# ---------------------------------------------------------------------------
# URL building
# ---------------------------------------------------------------------------


class TestBuildUrl:
    def test_relative_joined(self) -> None:
        client = ApiClient("https://api.example.com/v1/")
        assert client.build_url("/users") == "https://api.example.com/v1/users"

    def test_absolute_unchanged(self) -> None:
        client = ApiClient("https://api.example.com")
        assert client.build_url("http://other.test/x") == "http://other.test/x"

    def test_no_base(self) -> None:
        assert ApiClient().build_url("/users") == "/users"


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TestRequests:
    def test_get_with_params(self) -> None:
        recorder = Recorder()
        with make_client(recorder) as client:
            assert client.get("/users", params={"page": 2}) == {"ok": True}
        request = recorder.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://api.example.com/v1/users?page=2"
        assert request.headers["content-type"] == "application/json"

    def test_post_sends_json(self) -> None:
        recorder = Recorder()
        with make_client(recorder) as client:
            client.post("/users", {"name": "Ada"})
        assert json.loads(recorder.requests[0].content) == {"name": "Ada"}

    @pytest.mark.parametrize("method", ["put", "delete"])
    def test_other_verbs(self, method: str) -> None:
        recorder = Recorder()
        with make_client(recorder) as client:
            getattr(client, method)("/users/1", {"x": 1})
        assert recorder.requests[0].method == method.upper()

    def test_token_header(self) -> None:
        recorder = Recorder()
        with make_client(recorder, token_name="Authorization", token_provider=lambda: "Bearer t") as client:
            client.get("/me")
        assert recorder.requests[0].headers["Authorization"] == "Bearer t"

    def test_no_token_when_provider_returns_none(self) -> None:
        recorder = Recorder()
        with make_client(recorder, token_provider=lambda: None) as client:
            client.get("/me")
        assert "token" not in recorder.requests[0].headers

    def test_text_body(self) -> None:
        with make_client(Recorder(httpx.Response(200, text="plain"))) as client:
            assert client.get("/x") == "plain"

    def test_empty_body(self) -> None:
        with make_client(Recorder(httpx.Response(204))) as client:
            assert client.delete("/x") is None


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_non_2xx_raises(self) -> None:
        with make_client(Recorder(httpx.Response(404, json={"detail": "missing"}))) as client:
            with pytest.raises(ApiError) as exc_info:
                client.get("/missing")
        assert exc_info.value.status_code == 404
        assert exc_info.value.payload == {"detail": "missing"}

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(ApiError, match="failed"):
                client.get("/x")


# ---------------------------------------------------------------------------
# Interceptors
# ---------------------------------------------------------------------------


class TestInterceptors:
    def test_request_interceptor_modifies_config(self) -> None:
        recorder = Recorder()
        seen: list[RequestConfig] = []

        def add_header(config: RequestConfig) -> RequestConfig:
            seen.append(config)
            config.headers["x-trace"] = "abc"
            return config

        with make_client(recorder) as client:
            client.set_request_interceptor(add_header)
            client.get("/x")
        assert seen[0].url == "https://api.example.com/v1/x"
        assert recorder.requests[0].headers["x-trace"] == "abc"

    def test_response_interceptor_result_returned(self) -> None:
        with make_client(Recorder(httpx.Response(200, json={"data": [1, 2]}))) as client:
            client.set_response_interceptor(lambda response: response.json()["data"])
            assert client.get("/x") == [1, 2]

    def test_response_interceptor_rejects(self) -> None:
        with make_client(Recorder(httpx.Response(200, json={"code": 1}))) as client:
            client.set_response_interceptor(lambda response: None)
            with pytest.raises(ApiError, match="rejected"):
                client.get("/x")


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestFiles:
    def test_upload_multipart(self, tmp_path: Path) -> None:
        source = tmp_path / "report.txt"
        source.write_text("hello", encoding="utf-8")
        recorder = Recorder()

        with make_client(recorder) as client:
            assert client.upload("/files", source, name="doc", form_data={"kind": "report"}) == {"ok": True}

        request = recorder.requests[0]
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="doc"; filename="report.txt"' in request.content
        assert b"hello" in request.content
        assert b'name="kind"' in request.content

    def test_upload_missing_file(self, tmp_path: Path) -> None:
        with make_client(Recorder()) as client:
            with pytest.raises(ApiError, match="Upload"):
                client.upload("/files", tmp_path / "absent.txt")

    def test_download(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "data.bin"
        with make_client(Recorder(httpx.Response(200, content=b"\x00\x01payload"))) as client:
            assert client.download("/files/1", target) == target
        assert target.read_bytes() == b"\x00\x01payload"

    def test_download_error_status(self, tmp_path: Path) -> None:
        target = tmp_path / "data.bin"
        with make_client(Recorder(httpx.Response(500))) as client:
            with pytest.raises(ApiError) as exc_info:
                client.download("/files/1", target)
        assert exc_info.value.status_code == 500
        assert not target.exists()


class TestSharedClient:
    def test_singleton(self) -> None:
        assert get_api_client() is get_api_client()
