import inspect
from collections.abc import Callable, Mapping
from typing import Any

from nattydb.exceptions import EnvelopeError
from nattydb.models.endpoint import EndpointConfig
from nattydb.transport import RawResponse

__all__ = ["transform"]


def _accepts_context(func: Callable[..., Any]) -> bool:
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = [
        p
        for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters):
        return True
    return len(positional) >= 2


def _call(func: Callable[..., Any], value: Any, context: dict[str, Any] | None) -> Any:
    if context is not None and _accepts_context(func):
        return func(value, context)
    return func(value)


def transform(
    raw: RawResponse,
    config: EndpointConfig,
    context: dict[str, Any] | None = None,
) -> Any:
    """
    Turn a raw response into application data.

    ``fit`` adapts the payload into the ``{"success": ..., "content": ...}``
    envelope; without it the payload must already be one. ``process`` then
    projects the content. Both receive ``context`` as a second argument when
    they accept one.

    Raises:
        EnvelopeError: If the envelope's ``success`` is falsy.
    """
    envelope = raw.payload
    if config.fit is not None:
        envelope = _call(config.fit, raw.payload, context)

    if not isinstance(envelope, Mapping) or not envelope.get("success"):
        raise EnvelopeError(envelope, status=raw.status)

    content = envelope.get("content")
    if config.process is not None:
        return _call(config.process, content, context)
    return content
