import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console

from nattydb.exceptions import ConfigError
from nattydb.models.definitions import DefinitionsFile

__all__ = ["handle_validation_error", "load_definitions", "parse_data", "split_target"]


def handle_validation_error(e: ValidationError) -> None:
    console = Console(stderr=True)
    console.print("[bold red]Definitions Error:[/bold red]")
    for error in e.errors():
        field_name = ".".join(str(loc) for loc in error["loc"]) or "Global Definitions"
        message = error["msg"]
        input_value = error.get("input")
        console.print(
            f"  Field [bold]{field_name}[/bold]: {message} "
            f"(Invalid Value: [red]{input_value!r}[/red])"
        )


def load_definitions(path: Path) -> DefinitionsFile:
    """Load and validate a JSON definitions file."""
    if not path.exists():
        raise ConfigError(f"Definitions file not found: {path}")

    try:
        return DefinitionsFile.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        handle_validation_error(e)
        raise ConfigError(f"Failed to parse definitions file: {path}") from e


def split_target(target: str) -> tuple[str, str]:
    """Split ``Api.endpoint`` into its two parts."""
    api_name, sep, endpoint_name = target.partition(".")
    if not sep or not api_name or not endpoint_name:
        raise ConfigError(f"Target must look like 'Api.endpoint', got {target!r}")
    return api_name, endpoint_name


def parse_data(items: list[str]) -> dict[str, Any]:
    """
    Turn ``key=value`` pairs into a payload.

    Values are decoded as JSON when possible, so ``id=1`` sends a number.
    """
    payload: dict[str, Any] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ConfigError(f"Data must look like 'key=value', got {item!r}")
        try:
            payload[key] = json.loads(value)
        except ValueError:
            payload[key] = value
    return payload
