"""Sync and async HTTP transports for the OK REST gateway.

Every API method is a single ``GET`` against the gateway URL.  Each call
goes through the same lifecycle:

1. Sign the parameter set (or use a caller-supplied ``sig``).
2. Send one ``GET``; there is no retry.
3. On a transport failure -- raise :class:`OkNetworkError`.
4. On a non-2xx status -- raise :class:`OkHttpError`.
5. On ``2xx`` -- decode the JSON object and return it with the status.

Application errors arrive as ``200`` with an ``error_code`` field; they
are returned to the caller as data, never raised here.
"""

from __future__ import annotations

import json as _json
import sys
import time
from collections.abc import Mapping
from typing import Any

import httpx

from okgroups.config import OkConfig
from okgroups.errors import OkDecodeError, OkHttpError, OkNetworkError
from okgroups.observability import NoopMetricsHook, get_logger
from okgroups.signing import SIG_PARAM, sign

log = get_logger("okgroups.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _secrets(config: OkConfig) -> tuple[str | None, ...]:
    return (config.secret_key, config.session_key)


def _prepare_params(
    config: OkConfig,
    params: Mapping[str, str],
    sig: str | None,
) -> dict[str, str]:
    """Return the final query parameters, ``sig`` included."""
    query = {str(k): str(v) for k, v in params.items() if k != SIG_PARAM}
    query[SIG_PARAM] = sig if sig is not None else sign(query, config.secret_key)
    return query


def _decode_body(response: httpx.Response, api_method: str) -> dict:
    """Decode a 2xx body into a JSON object."""
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError as exc:
        raise OkDecodeError(
            f"Non-JSON response for {api_method}",
            context={"api_method": api_method, "body": response.text[:500]},
            cause=exc,
        ) from exc
    if not isinstance(body, dict):
        raise OkDecodeError(
            f"Expected a JSON object for {api_method}, got {type(body).__name__}",
            context={"api_method": api_method, "body": body},
        )
    return body


def _raise_for_status(response: httpx.Response, api_method: str) -> None:
    """Raise :class:`OkHttpError` for any non-2xx status."""
    status = response.status_code
    if 200 <= status < 300:
        return
    raise OkHttpError(
        f"HTTP {status} for {api_method}",
        context={
            "status_code": status,
            "api_method": api_method,
            "body": response.text[:500],
        },
    )


def _dump_payload(
    url: str,
    params: Mapping[str, str],
    response_status: int | None,
    response_body: Any | None,
    secrets: tuple[str | None, ...] = (),
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    from okgroups.utils.redact import redact

    dump: dict[str, Any] = {
        "method": "GET",
        "url": url,
        "params": dict(params),
    }
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(
        _json.dumps(redact(dump, secrets), indent=2, default=str),
        file=sys.stderr,
    )


def _network_error(
    config: OkConfig,
    metrics: Any,
    api_method: str,
    exc: Exception,
) -> OkNetworkError:
    metrics.increment(
        "okgroups.requests_total",
        tags={"api_method": api_method, "status": "error"},
    )
    log.warning(
        "Request network error",
        extra={
            "extra_fields": {
                "op": "request",
                "api_method": api_method,
                "error": str(exc),
            }
        },
    )
    return OkNetworkError(
        f"Network error on {api_method}: {exc}",
        context={"url": config.base_url, "api_method": api_method},
        cause=exc,
    )


def _process_response(
    config: OkConfig,
    metrics: Any,
    api_method: str,
    query: Mapping[str, str],
    response: httpx.Response,
    elapsed_ms: float,
) -> tuple[int, dict]:
    """Shared post-response handling for both transports."""
    status = str(response.status_code)
    metrics.increment(
        "okgroups.requests_total",
        tags={"api_method": api_method, "status": status},
    )
    metrics.timing(
        "okgroups.request_duration_ms",
        elapsed_ms,
        tags={"api_method": api_method, "status": status},
    )

    if config.debug_dump_payload:
        try:
            resp_body: Any = response.json()
        except ValueError:
            resp_body = response.text[:1000]
        _dump_payload(
            config.base_url, query, response.status_code, resp_body,
            secrets=_secrets(config),
        )

    _raise_for_status(response, api_method)
    body = _decode_body(response, api_method)

    log.debug(
        "Request complete",
        extra={
            "extra_fields": {
                "op": "request",
                "api_method": api_method,
                "status_code": response.status_code,
                "duration_ms": round(elapsed_ms, 1),
            }
        },
    )
    if "error_code" in body:
        metrics.increment(
            "okgroups.api_errors_total",
            tags={"api_method": api_method, "error_code": str(body["error_code"])},
        )
        log.info(
            "API error reported",
            extra={
                "extra_fields": {
                    "op": "request",
                    "api_method": api_method,
                    "error_code": body.get("error_code"),
                    "error_msg": body.get("error_msg"),
                }
            },
        )
    return response.status_code, body


def _client_kwargs(config: OkConfig) -> dict[str, Any]:
    return {
        "timeout": httpx.Timeout(config.timeout_seconds),
        "proxy": config.http_proxy,
        "headers": {"Accept": "application/json"},
    }


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class OkTransport:
    """Synchronous transport for the gateway.

    Parameters
    ----------
    config:
        An :class:`OkConfig` instance controlling all transport behaviour.
    """

    def __init__(self, config: OkConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.Client(**_client_kwargs(config))

    @property
    def config(self) -> OkConfig:
        return self._config

    # -- public API --------------------------------------------------------

    def call(
        self,
        params: Mapping[str, str],
        *,
        sig: str | None = None,
    ) -> tuple[int, dict]:
        """Sign *params* and issue one ``GET`` against the gateway.

        Parameters
        ----------
        params:
            Unsigned query parameters.  Any ``sig`` entry is ignored.
        sig:
            Use this signature verbatim instead of computing one.

        Returns
        -------
        tuple[int, dict]
            HTTP status code and the decoded JSON object.

        Raises
        ------
        OkNetworkError
            On timeouts and connection failures.
        OkHttpError
            On non-2xx responses.
        OkDecodeError
            When the body is not a JSON object.
        """
        query = _prepare_params(self._config, params, sig)
        api_method = query.get("method", "")

        t0 = time.monotonic()
        try:
            response = self._client.request("GET", self._config.base_url, params=query)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            raise _network_error(self._config, self._metrics, api_method, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000

        return _process_response(
            self._config, self._metrics, api_method, query, response, elapsed_ms,
        )

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> OkTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncOkTransport:
    """Asynchronous transport for the gateway.

    Mirrors :class:`OkTransport` but uses ``httpx.AsyncClient``.
    """

    def __init__(self, config: OkConfig) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._client = httpx.AsyncClient(**_client_kwargs(config))

    @property
    def config(self) -> OkConfig:
        return self._config

    async def call(
        self,
        params: Mapping[str, str],
        *,
        sig: str | None = None,
    ) -> tuple[int, dict]:
        """Sign *params* and issue one ``GET`` (async).

        See :meth:`OkTransport.call` for full documentation.
        """
        query = _prepare_params(self._config, params, sig)
        api_method = query.get("method", "")

        t0 = time.monotonic()
        try:
            response = await self._client.request("GET", self._config.base_url, params=query)
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            raise _network_error(self._config, self._metrics, api_method, exc) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000

        return _process_response(
            self._config, self._metrics, api_method, query, response, elapsed_ms,
        )

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncOkTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
