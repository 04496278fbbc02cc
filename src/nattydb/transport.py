"""Request execution for resolved endpoints: standard HTTP requests and JSONP."""

import asyncio
import itertools
import json
import re
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from loguru import logger

from nattydb.exceptions import RequestTimeoutError, TransportError
from nattydb.models.endpoint import EndpointConfig

__all__ = [
    "AjaxTransport",
    "JsonpTransport",
    "RawResponse",
    "Transport",
    "dispatch",
]

BODYLESS_METHODS = frozenset({"GET", "HEAD", "DELETE", "OPTIONS"})
DEFAULT_JSONP_CALLBACK_QUERY = {"callback": "jsonp{id}"}
DEFAULT_SCHEME = "https:"
JSONP_PADDING = re.compile(r"^\s*(?:/\*\*/)?\s*([\w$.]+)\s*\((.*)\)\s*;?\s*$", re.DOTALL)

_jsonp_ids = itertools.count(1)


@dataclass(frozen=True)
class RawResponse:
    """Decoded response payload together with the HTTP status, when there is one."""

    payload: Any
    status: int | None = None


class Transport(Protocol):
    async def send(self, config: EndpointConfig, data: Mapping[str, Any]) -> RawResponse: ...


def _log(config: EndpointConfig, message: str) -> None:
    logger.log("INFO" if config.log else "DEBUG", message)


def _absolute(url: str) -> str:
    # protocol-relative urls have no page to inherit a scheme from
    if url.startswith("//"):
        return DEFAULT_SCHEME + url
    return url


class AjaxTransport:
    """Sends a standard HTTP request and decodes its JSON body."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def send(self, config: EndpointConfig, data: Mapping[str, Any]) -> RawResponse:
        url = _absolute(config.request_url)
        kwargs: dict[str, Any] = {"headers": config.header}
        if data and config.method in BODYLESS_METHODS:
            kwargs["params"] = dict(data)
        elif data:
            kwargs["json"] = dict(data)

        _log(config, f"{config.method} {url}")
        try:
            response = await self.client.request(config.method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request to {url} timed out") from e
        except httpx.TransportError as e:
            raise TransportError(f"Request to {url} could not be completed: {e}", status=0) from e

        _log(config, f"{config.method} {url} -> {response.status_code}")
        if not response.is_success:
            raise TransportError(
                f"Request to {url} failed with status {response.status_code}",
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(
                f"Response from {url} is not valid JSON", status=response.status_code
            ) from e
        return RawResponse(payload=payload, status=response.status_code)


class JsonpTransport:
    """
    Performs a JSONP call: a GET carrying a callback parameter, whose body is
    the JSON payload wrapped in a call to that callback.

    JSONP has no notion of HTTP status, so every failure to obtain a usable
    payload is reported with ``status=0``.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    @staticmethod
    def callback_query(config: EndpointConfig) -> dict[str, str]:
        """Build the callback query parameters, substituting a unique ``{id}``."""
        call_id = str(next(_jsonp_ids))
        query = config.jsonp_callback_query or DEFAULT_JSONP_CALLBACK_QUERY
        return {name: template.replace("{id}", call_id) for name, template in query.items()}

    @staticmethod
    def unwrap(body: str, callback: str) -> Any:
        match = JSONP_PADDING.match(body)
        if match is None or match.group(1) != callback:
            raise ValueError(f"Response is not a call to {callback}")
        return json.loads(match.group(2))

    async def send(self, config: EndpointConfig, data: Mapping[str, Any]) -> RawResponse:
        url = _absolute(config.request_url)
        callback_query = self.callback_query(config)
        callback = next(iter(callback_query.values()))
        params = {**data, **callback_query}

        _log(config, f"JSONP {url} (callback={callback})")
        try:
            response = await self.client.get(url, params=params, headers=config.header)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"JSONP request to {url} timed out") from e
        except httpx.TransportError as e:
            raise TransportError(f"JSONP request to {url} could not be loaded: {e}") from e

        if not response.is_success:
            raise TransportError(f"JSONP request to {url} could not be loaded")
        try:
            payload = self.unwrap(response.text, callback)
        except ValueError as e:
            raise TransportError(f"JSONP response from {url} is invalid: {e}") from e
        return RawResponse(payload=payload)


async def _race(config: EndpointConfig, attempt: Awaitable[RawResponse]) -> RawResponse:
    if config.timeout is None:
        return await attempt
    try:
        return await asyncio.wait_for(attempt, timeout=config.timeout / 1000)
    except asyncio.TimeoutError as e:
        _log(config, f"{config.request_url} timed out after {config.timeout}ms")
        raise RequestTimeoutError(
            f"No response from {config.request_url} within {config.timeout}ms"
        ) from e


async def dispatch(
    config: EndpointConfig,
    data: Mapping[str, Any] | None = None,
    client: httpx.AsyncClient | None = None,
) -> RawResponse:
    """
    Execute exactly one request for ``config``.

    Args:
        config: Resolved endpoint configuration.
        data: Request payload (query params or JSON body).
        client: Shared client; when omitted a client is opened for this call only.

    Raises:
        TransportError: On a non-2xx status or when no response was obtainable.
        RequestTimeoutError: When ``config.timeout`` milliseconds pass without a response.
    """
    payload = dict(data or {})
    transport_cls: type[AjaxTransport] | type[JsonpTransport] = (
        JsonpTransport if config.jsonp else AjaxTransport
    )

    if client is not None:
        return await _race(config, transport_cls(client).send(config, payload))

    # the timeout is enforced by _race, not by httpx
    async with httpx.AsyncClient(timeout=None) as owned:
        return await _race(config, transport_cls(owned).send(config, payload))
