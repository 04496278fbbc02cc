from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger

from nattydb.exceptions import ConfigError
from nattydb.models.endpoint import EndpointConfig
from nattydb.resolver import Definition, DynamicDefinition, as_definition, resolve
from nattydb.transform import transform
from nattydb.transport import dispatch

if TYPE_CHECKING:
    from .context import Context

__all__ = ["Api", "Endpoint", "create_api"]


class Endpoint:
    """
    Callable bound to one endpoint definition of a context.

    Awaiting a call performs the request and returns the transformed data.
    ``config`` exposes the resolved configuration: mapping definitions are
    resolved once, when the endpoint is created; function definitions are
    evaluated again on every access and every call, never by ``create()``.
    """

    def __init__(
        self, context: "Context", api_name: str, name: str, definition: Definition
    ) -> None:
        self.context = context
        self.api_name = api_name
        self.name = name
        self.definition = definition
        self._static_config: EndpointConfig | None = None
        if not isinstance(definition, DynamicDefinition):
            self._static_config = resolve(context.defaults, definition)

    def __repr__(self) -> str:
        if self._static_config is None:
            return f"<Endpoint {self.api_name}.{self.name} (dynamic)>"
        config = self._static_config
        return f"<Endpoint {self.api_name}.{self.name} {config.method} {config.url}>"

    @property
    def config(self) -> EndpointConfig:
        """Resolved configuration; function definitions are evaluated on access."""
        if self._static_config is not None:
            return self._static_config
        return resolve(self.context.defaults, self.definition)

    async def __call__(self, data: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        config = self.config
        payload = {**config.data, **(data or {}), **kwargs}
        logger.debug(f"Calling {self.api_name}.{self.name}")

        raw = await dispatch(config, payload, client=self.context.client)
        return transform(raw, config, self.context.context)


class Api(dict[str, Endpoint]):
    """
    Mapping of endpoint name to ``Endpoint``.

    Endpoints are also reachable as attributes (``api.create``); an endpoint
    attribute shadows a ``dict`` method of the same name.
    """

    def __init__(self, api_name: str, endpoints: Mapping[str, Endpoint]) -> None:
        super().__init__(endpoints)
        self._api_name = api_name
        self.__dict__.update(endpoints)

    def __getattr__(self, item: str) -> Endpoint:
        raise AttributeError(f"API {self.__dict__.get('_api_name')!r} has no endpoint {item!r}")


def create_api(context: "Context", name: str, definitions: Mapping[str, Any]) -> Api:
    """
    Build an API object from endpoint definitions.

    Args:
        context: Context providing the defaults and the shared cache.
        name: Name of the API, used in logs and error messages.
        definitions: Endpoint name mapped to a mapping or a function returning one.

    Raises:
        ConfigError: If any definition is malformed.
    """
    if not isinstance(definitions, Mapping):
        raise ConfigError(f"Endpoints of API {name!r} must be given as a mapping")

    endpoints: dict[str, Endpoint] = {}
    for endpoint_name, raw in definitions.items():
        try:
            endpoints[endpoint_name] = Endpoint(context, name, endpoint_name, as_definition(raw))
        except ConfigError as e:
            raise ConfigError(f"{name}.{endpoint_name}: {e.message}") from e

    logger.debug(f"Created API {name!r} with endpoints: {', '.join(endpoints) or 'none'}")
    return Api(name, endpoints)
