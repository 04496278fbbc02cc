from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["DEFAULT_METHOD", "EndpointConfig", "EndpointDefinition", "JsonpOption"]

DEFAULT_METHOD = "GET"

JsonpOption = bool | tuple[bool, str, str]


class EndpointDefinition(BaseModel):
    """Raw, user-supplied endpoint settings before any defaults are applied."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True, populate_by_name=True)

    url: str = ""
    method: str = DEFAULT_METHOD
    mock: bool | None = None
    mock_url: str | None = Field(default=None, alias="mockUrl")
    jsonp: JsonpOption | None = None
    timeout: int | None = None
    header: dict[str, str] = Field(default_factory=dict)
    data: dict[str, Any] = Field(default_factory=dict)
    fit: Callable[..., Any] | None = None
    process: Callable[..., Any] | None = None
    log: bool = False

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()

    @field_validator("timeout")
    @classmethod
    def _timeout_or_none(cls, value: int | None) -> int | None:
        # 0 means no timeout
        if value == 0:
            return None
        if value is not None and value < 0:
            raise ValueError("timeout must not be negative")
        return value


class EndpointConfig(BaseModel):
    """Fully resolved configuration of a single endpoint."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: str
    method: str = DEFAULT_METHOD
    mock: bool = False
    mock_url: str | None = None
    jsonp: bool = False
    jsonp_callback_query: dict[str, str] | None = None
    timeout: int | None = None
    header: dict[str, str] = Field(default_factory=dict)
    data: dict[str, Any] = Field(default_factory=dict)
    fit: Callable[..., Any] | None = None
    process: Callable[..., Any] | None = None
    log: bool = False

    @property
    def request_url(self) -> str:
        """URL the request is actually sent to, honoring mock mode."""
        if self.mock and self.mock_url:
            return self.mock_url
        return self.url
