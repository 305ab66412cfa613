from __future__ import annotations

import json
import logging
from typing import Any, Callable

import httpx

from .config_types import ClientConfig
from .endpoints import METHODS, Endpoint, expected_codes
from .envelope import Envelope
from .errors import (
    ApiError,
    AuthError,
    ConfigError,
    DecodeError,
    NotFoundError,
    TransportError,
    UnexpectedStatusError,
)
from .extract import DEFAULT_ERROR_EXTRACTOR, ErrorExtractor

log = logging.getLogger(__name__)

Decoder = Callable[[Any], Any]


def _base_headers(cfg: ClientConfig) -> dict[str, str]:
    return {"User-Agent": cfg.user_agent, "Accept": "application/json"}


def _request_headers(cfg: ClientConfig, method: str, path: str, authenticated: bool) -> dict[str, str]:
    if method not in METHODS:
        raise ConfigError(f"unsupported method {method!r}")
    headers: dict[str, str] = {}
    if authenticated:
        if not cfg.has_token:
            raise ConfigError(f"{method} {path} requires authentication but no token is configured")
        headers["Authorization"] = f"Bearer {cfg.token}"
    return headers


def _json_body(body: Any) -> Any:
    if body is None:
        return None
    to_dict = getattr(body, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return body


def _decode_body(content: bytes, decode: Decoder | None) -> tuple[Any, Any]:
    """Returns (raw JSON data, typed payload). Empty bodies are not decoded here;
    ``_finish`` rejects them once the status is known to be a success."""
    if not content.strip():
        return None, None
    try:
        data = json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"response is not valid JSON: {e}") from e
    if decode is None:
        return data, data
    try:
        return data, decode(data)
    except DecodeError:
        raise
    except (TypeError, ValueError, KeyError, AttributeError) as e:
        raise DecodeError(f"unexpected response shape: {e}") from e


def _finish(
        method: str,
        path: str,
        response: httpx.Response,
        *,
        expected: tuple[int, ...],
        decode: Decoder | None,
        lookup: bool,
        error_extractor: ErrorExtractor | None,
        check_error_field: bool,
) -> Envelope:
    status = response.status_code
    log.debug("%s %s -> %s (%d bytes)", method, path, status, len(response.content))

    data, payload = _decode_body(response.content, decode)
    extractor = error_extractor or DEFAULT_ERROR_EXTRACTOR
    error_text = extractor.extract(data)

    if status not in expected:
        if status == 404 and lookup:
            raise NotFoundError(expected, status, error_text)
        if status in (401, 403):
            raise AuthError(expected, status, error_text)
        raise UnexpectedStatusError(expected, status, error_text)

    if check_error_field and error_text:
        raise ApiError(error_text, status)

    # a typed payload was promised; only 204 may come back without one
    if decode is not None and data is None and status != 204:
        raise DecodeError(f"{method} {path}: empty response body")

    return Envelope(payload=payload, error_message=error_text, status_code=status)


class RestClient:
    """Synchronous JSON client bound to ``{base_url}/api/v{N}``.

    ``transport`` is the pluggable ``send(request) -> response`` capability;
    pass an ``httpx.MockTransport`` to run without a network.
    """

    def __init__(self, cfg: ClientConfig, *, transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        self._client = httpx.Client(
            base_url=cfg.api_base_url,
            timeout=cfg.timeout_s,
            headers=_base_headers(cfg),
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RestClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def execute(
            self,
            method: str,
            path: str,
            *,
            body: Any | None = None,
            authenticated: bool = True,
            expected_status: int | tuple[int, ...] = 200,
            decode: Decoder | None = None,
            lookup: bool = False,
            error_extractor: ErrorExtractor | None = None,
            check_error_field: bool = True,
    ) -> Envelope:
        headers = _request_headers(self._cfg, method, path, authenticated)
        expected = expected_codes(expected_status)
        request = self._client.build_request(method, path, json=_json_body(body), headers=headers)
        log.debug("%s %s", method, request.url)
        try:
            response = self._client.send(request)
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        return _finish(
            method,
            path,
            response,
            expected=expected,
            decode=decode,
            lookup=lookup,
            error_extractor=error_extractor,
            check_error_field=check_error_field,
        )

    def call(self, endpoint: Endpoint, *, body: Any | None = None, **path_params: Any) -> Envelope:
        return self.execute(
            endpoint.method,
            endpoint.render(**path_params),
            body=body,
            authenticated=endpoint.authenticated,
            expected_status=endpoint.expected_status,
            decode=endpoint.decode,
            lookup=endpoint.lookup,
            error_extractor=endpoint.error_extractor,
            check_error_field=endpoint.check_error_field,
        )


class AsyncRestClient:
    """Asyncio flavour of :class:`RestClient`.

    Cancel the awaiting task (or wrap the call in ``asyncio.timeout``) to abort
    an in-flight request; nothing partial is returned.
    """

    def __init__(self, cfg: ClientConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        self._cfg = cfg
        self._client = httpx.AsyncClient(
            base_url=cfg.api_base_url,
            timeout=cfg.timeout_s,
            headers=_base_headers(cfg),
            transport=transport,
        )

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AsyncRestClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def execute(
            self,
            method: str,
            path: str,
            *,
            body: Any | None = None,
            authenticated: bool = True,
            expected_status: int | tuple[int, ...] = 200,
            decode: Decoder | None = None,
            lookup: bool = False,
            error_extractor: ErrorExtractor | None = None,
            check_error_field: bool = True,
    ) -> Envelope:
        headers = _request_headers(self._cfg, method, path, authenticated)
        expected = expected_codes(expected_status)
        request = self._client.build_request(method, path, json=_json_body(body), headers=headers)
        log.debug("%s %s", method, request.url)
        try:
            response = await self._client.send(request)
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        return _finish(
            method,
            path,
            response,
            expected=expected,
            decode=decode,
            lookup=lookup,
            error_extractor=error_extractor,
            check_error_field=check_error_field,
        )

    async def call(self, endpoint: Endpoint, *, body: Any | None = None, **path_params: Any) -> Envelope:
        return await self.execute(
            endpoint.method,
            endpoint.render(**path_params),
            body=body,
            authenticated=endpoint.authenticated,
            expected_status=endpoint.expected_status,
            decode=endpoint.decode,
            lookup=endpoint.lookup,
            error_extractor=endpoint.error_extractor,
            check_error_field=endpoint.check_error_field,
        )

