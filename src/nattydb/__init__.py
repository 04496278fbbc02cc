from .context import Context
from .exceptions import (
    ConfigError,
    EnvelopeError,
    NattyDBError,
    RequestError,
    RequestTimeoutError,
    TransportError,
)
from .factory import Api, Endpoint
from .models.endpoint import EndpointConfig

__all__ = [
    "Api",
    "ConfigError",
    "Context",
    "Endpoint",
    "EndpointConfig",
    "EnvelopeError",
    "NattyDBError",
    "RequestError",
    "RequestTimeoutError",
    "TransportError",
]
