"""Context holding the defaults shared by the APIs it creates."""

from collections.abc import Mapping
from typing import Any

import httpx

from nattydb.factory import Api, create_api
from nattydb.models.config import Config
from nattydb.resolver import ContextDefaults

__all__ = ["Context"]


class Context:
    """
    Scope for a family of APIs.

    Defaults are fixed at construction. ``context`` is a free-form dict that
    ``fit``/``process`` callables may use to keep state across calls; the
    owner clears or replaces it between sessions.
    """

    def __init__(
        self,
        url_prefix: str | None = None,
        mock: bool | None = None,
        mock_url_prefix: str | None = None,
        location: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            url_prefix: Prepended to relative endpoint urls. Defaults to ``NATTYDB_URL_PREFIX``.
            mock: Mock mode default; ``None`` defers to the ``m=1`` marker of the page location.
            mock_url_prefix: Prepended to relative ``mock_url`` values.
            location: Page URL checked for ``m=1``; ``None`` reads ``NATTYDB_LOCATION``
                each time a config is resolved.
            client: Shared client for all calls; without one each call opens its own.
        """
        if url_prefix is None or mock_url_prefix is None:
            config = Config()
            url_prefix = config.url_prefix if url_prefix is None else url_prefix
            mock_url_prefix = config.mock_url_prefix if mock_url_prefix is None else mock_url_prefix

        self._defaults = ContextDefaults(
            url_prefix=url_prefix,
            mock=mock,
            mock_url_prefix=mock_url_prefix,
            location=location,
        )
        self.client = client
        self.context: dict[str, Any] = {}

    @property
    def defaults(self) -> ContextDefaults:
        return self._defaults

    @property
    def url_prefix(self) -> str:
        return self._defaults.url_prefix

    @property
    def mock(self) -> bool | None:
        return self._defaults.mock

    @property
    def mock_url_prefix(self) -> str:
        return self._defaults.mock_url_prefix

    @property
    def location(self) -> str | None:
        return self._defaults.location

    def create(self, name: str, definitions: Mapping[str, Any]) -> Api:
        """Create a fresh API object; see :func:`nattydb.factory.create_api`."""
        return create_api(self, name, definitions)
