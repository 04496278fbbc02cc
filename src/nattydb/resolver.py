"""Merging of library, context and endpoint settings into an ``EndpointConfig``."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

from loguru import logger
from pydantic import ValidationError

from nattydb.exceptions import ConfigError
from nattydb.models.config import Config
from nattydb.models.endpoint import EndpointConfig, EndpointDefinition, JsonpOption

__all__ = [
    "ContextDefaults",
    "Definition",
    "DynamicDefinition",
    "StaticDefinition",
    "as_definition",
    "detect_jsonp",
    "is_absolute_url",
    "mock_from_location",
    "resolve",
    "resolve_url",
]

ABSOLUTE_URL_PREFIXES = ("http://", "https://", "//")
JSONP_SUFFIX = re.compile(r"\.jsonp(\?.*)?$")
MOCK_MARKER = re.compile(r"\bm=1\b")


@dataclass(frozen=True)
class ContextDefaults:
    """Defaults shared by every endpoint of a context."""

    url_prefix: str = ""
    mock: bool | None = None
    mock_url_prefix: str = ""
    location: str | None = None


@dataclass(frozen=True)
class StaticDefinition:
    """Endpoint defined by a plain mapping."""

    config: Mapping[str, Any] | EndpointDefinition


@dataclass(frozen=True)
class DynamicDefinition:
    """Endpoint defined by a zero-argument callable, evaluated on every resolution."""

    factory: Callable[[], Mapping[str, Any] | EndpointDefinition]


Definition = StaticDefinition | DynamicDefinition


def as_definition(raw: Any) -> Definition:
    """Tag a raw endpoint definition as static or dynamic."""
    if isinstance(raw, StaticDefinition | DynamicDefinition):
        return raw
    if isinstance(raw, Mapping | EndpointDefinition):
        return StaticDefinition(raw)
    if callable(raw):
        return DynamicDefinition(raw)
    raise ConfigError(
        f"Endpoint definition must be a mapping or a function returning one, "
        f"got {type(raw).__name__}"
    )


def is_absolute_url(url: str) -> bool:
    return url.startswith(ABSOLUTE_URL_PREFIXES)


def resolve_url(prefix: str, url: str) -> str:
    """Prepend ``prefix`` unless ``url`` is already absolute."""
    if is_absolute_url(url):
        return url
    return prefix + url


def detect_jsonp(url: str) -> bool:
    """True when ``url`` ends with ``.jsonp``, optionally followed by a query string."""
    return JSONP_SUFFIX.search(url) is not None


def mock_from_location(location: str) -> bool:
    """True when the query string of ``location`` carries the ``m=1`` marker."""
    return MOCK_MARKER.search(urlsplit(location).query) is not None


def _evaluate(definition: Definition) -> EndpointDefinition:
    if isinstance(definition, DynamicDefinition):
        produced = definition.factory()
    else:
        produced = definition.config

    if isinstance(produced, EndpointDefinition):
        return produced
    if not isinstance(produced, Mapping):
        raise ConfigError(
            f"Endpoint definition function must return a mapping, got {type(produced).__name__}"
        )

    try:
        return EndpointDefinition.model_validate(dict(produced))
    except ValidationError as e:
        raise ConfigError(f"Invalid endpoint definition: {e}") from e


def _resolve_mock(defaults: ContextDefaults, explicit: bool | None) -> bool:
    if explicit is not None:
        return explicit
    if defaults.mock is not None:
        return defaults.mock
    location = defaults.location if defaults.location is not None else Config().location
    return mock_from_location(location)


def _resolve_jsonp(url: str, option: JsonpOption | None) -> tuple[bool, dict[str, str] | None]:
    if isinstance(option, tuple):
        enabled, param_name, template = option
        return enabled, {param_name: template}
    if option is not None:
        return option, None
    return detect_jsonp(url), None


def resolve(defaults: ContextDefaults, raw: Any) -> EndpointConfig:
    """
    Resolve a raw endpoint definition against the context defaults.

    Args:
        defaults: Defaults of the owning context.
        raw: A mapping, a zero-argument function returning one, or a tagged definition.

    Returns:
        The resolved, immutable endpoint configuration.

    Raises:
        ConfigError: If the definition is malformed.
    """
    definition = _evaluate(as_definition(raw))

    jsonp, jsonp_callback_query = _resolve_jsonp(definition.url, definition.jsonp)
    mock_url = None
    if definition.mock_url:
        mock_url = resolve_url(defaults.mock_url_prefix, definition.mock_url)

    config = EndpointConfig(
        url=resolve_url(defaults.url_prefix, definition.url),
        method=definition.method,
        mock=_resolve_mock(defaults, definition.mock),
        mock_url=mock_url,
        jsonp=jsonp,
        jsonp_callback_query=jsonp_callback_query,
        timeout=definition.timeout,
        header=dict(definition.header),
        data=dict(definition.data),
        fit=definition.fit,
        process=definition.process,
        log=definition.log,
    )
    logger.trace(f"Resolved {config.url} (mock={config.mock}, jsonp={config.jsonp})")
    return config
