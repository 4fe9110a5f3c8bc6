"""Thin JSON API client over httpx.

Relative URLs are joined to ``base_url``; absolute ``http(s)://`` URLs are
used as-is.  Every request passes through an optional request interceptor,
and every response through an optional response interceptor that may
reject it by returning ``None``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

__all__ = ["ApiClient", "ApiError", "RequestConfig", "get_api_client"]

DEFAULT_TIMEOUT = 60.0


class ApiError(Exception):
    """Raised for transport failures, non-2xx responses and rejected responses."""

    def __init__(self, message: str, *, status_code: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class RequestConfig(BaseModel):
    """A request as seen by the request interceptor."""

    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, Any] | None = None
    json_body: Any = None
    timeout: float = DEFAULT_TIMEOUT


RequestInterceptor = Callable[[RequestConfig], RequestConfig]
ResponseInterceptor = Callable[[httpx.Response], Any]


def _decode(response: httpx.Response) -> Any:
    """Return the JSON body when there is one, else the text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """Synchronous API client.

    Parameters
    ----------
    base_url:
        Prefix for relative request URLs.
    timeout:
        Per-request timeout in seconds.
    headers:
        Default headers sent with every request.
    token_name:
        Header used to send the token returned by *token_provider*.
    token_provider:
        Returns the current auth token, or ``None`` to send no token.
    transport:
        Custom httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
        token_name: str = "token",
        token_provider: Callable[[], str | None] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.headers: dict[str, str] = {"content-type": "application/json", **(headers or {})}
        self.token_name = token_name
        self._token_provider = token_provider
        self._request_interceptor: RequestInterceptor | None = None
        self._response_interceptor: ResponseInterceptor | None = None
        self._client = httpx.Client(transport=transport)

    def set_request_interceptor(self, callback: RequestInterceptor | None) -> None:
        self._request_interceptor = callback

    def set_response_interceptor(self, callback: ResponseInterceptor | None) -> None:
        self._response_interceptor = callback

    def build_url(self, url: str) -> str:
        if url.startswith(("http://", "https://")):
            return url
        if not self.base_url:
            return url
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"

    def _prepare(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> RequestConfig:
        merged = {**self.headers, **(headers or {})}
        if self._token_provider is not None:
            token = self._token_provider()
            if token:
                merged[self.token_name] = token
        config = RequestConfig(
            method=method,
            url=self.build_url(url),
            headers=merged,
            params=params,
            json_body=json_body,
            timeout=self.timeout,
        )
        if self._request_interceptor is not None:
            config = self._request_interceptor(config)
        return config

    def _handle_response(self, response: httpx.Response) -> Any:
        if self._response_interceptor is not None:
            result = self._response_interceptor(response)
            if result is None:
                raise ApiError(
                    f"Response from {response.request.url} was rejected",
                    status_code=response.status_code,
                    payload=_decode(response),
                )
            return result

        if 200 <= response.status_code < 300:
            return _decode(response)
        raise ApiError(
            f"{response.request.method} {response.request.url} returned {response.status_code}",
            status_code=response.status_code,
            payload=_decode(response),
        )

    def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded body.

        Raises
        ------
        ApiError
            On transport errors, non-2xx status, or interceptor rejection.
        """
        config = self._prepare(method, url, params=params, json_body=data, headers=headers)
        try:
            response = self._client.request(
                config.method,
                config.url,
                params=config.params,
                json=config.json_body,
                headers=config.headers,
                timeout=config.timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", config.method, config.url, exc)
            raise ApiError(f"{config.method} {config.url} failed: {exc}") from exc
        return self._handle_response(response)

    def get(self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None) -> Any:
        return self.request("GET", url, params=params, headers=headers)

    def post(self, url: str, data: Any = None, headers: dict[str, str] | None = None) -> Any:
        return self.request("POST", url, data=data, headers=headers)

    def put(self, url: str, data: Any = None, headers: dict[str, str] | None = None) -> Any:
        return self.request("PUT", url, data=data, headers=headers)

    def delete(self, url: str, data: Any = None, headers: dict[str, str] | None = None) -> Any:
        return self.request("DELETE", url, data=data, headers=headers)

    def upload(
        self,
        url: str,
        file_path: Path | str,
        name: str = "file",
        form_data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST *file_path* as multipart form field *name*."""
        config = self._prepare("POST", url, headers=headers)
        # httpx sets the multipart boundary itself.
        config.headers.pop("content-type", None)
        path = Path(file_path)
        try:
            with path.open("rb") as fh:
                response = self._client.post(
                    config.url,
                    files={name: (path.name, fh)},
                    data=form_data or {},
                    headers=config.headers,
                    timeout=config.timeout,
                )
        except (OSError, httpx.HTTPError) as exc:
            raise ApiError(f"Upload of {path} to {config.url} failed: {exc}") from exc
        return self._handle_response(response)

    def download(
        self,
        url: str,
        destination: Path | str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Path:
        """GET *url* and stream the body to *destination*."""
        config = self._prepare("GET", url, params=params, headers=headers)
        target = Path(destination)
        try:
            with self._client.stream(
                "GET",
                config.url,
                params=config.params,
                headers=config.headers,
                timeout=config.timeout,
            ) as response:
                if not 200 <= response.status_code < 300:
                    raise ApiError(
                        f"GET {config.url} returned {response.status_code}",
                        status_code=response.status_code,
                    )
                target.parent.mkdir(parents=True, exist_ok=True)
                with target.open("wb") as fh:
                    for chunk in response.iter_bytes():
                        fh.write(chunk)
        except (OSError, httpx.HTTPError) as exc:
            raise ApiError(f"Download from {config.url} failed: {exc}") from exc
        return target

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


_lock = threading.Lock()
_instance: ApiClient | None = None


def get_api_client() -> ApiClient:
    """Return the shared :class:`ApiClient`, creating it on first use."""
    global _instance
    if _instance is not None:
        return _instance
    with _lock:
        if _instance is None:
            _instance = ApiClient()
        return _instance
