import asyncio
from pathlib import Path
from typing import Annotated, Any

import typer

from nattydb.cli.console import console, print_error, print_info
from nattydb.cli.utils import load_definitions, parse_data, split_target
from nattydb.context import Context
from nattydb.exceptions import ConfigError, EnvelopeError, RequestError


def call_endpoint(
    definitions_file: Annotated[Path, typer.Argument(help="Path to the JSON definitions file")],
    target: Annotated[str, typer.Argument(help="Endpoint to call, as 'Api.endpoint'")],
    data: Annotated[
        list[str] | None, typer.Option("--data", "-d", help="Request data as key=value")
    ] = None,
    url_prefix: Annotated[
        str | None, typer.Option("--url-prefix", "-p", help="Prefix for relative urls")
    ] = None,
    mock: Annotated[
        bool | None, typer.Option("--mock/--no-mock", help="Context-wide mock default")
    ] = None,
) -> None:
    """
    Call one endpoint of a definitions file and print the resulting data.
    """
    definitions = load_definitions(definitions_file)
    api_name, endpoint_name = split_target(target)
    if api_name not in definitions.root:
        raise ConfigError(f"API {api_name!r} is not defined in {definitions_file}")

    context = Context(url_prefix=url_prefix, mock=mock)
    api = context.create(api_name, definitions.root[api_name])
    if endpoint_name not in api:
        raise ConfigError(f"API {api_name!r} has no endpoint {endpoint_name!r}")

    endpoint = api[endpoint_name]
    config = endpoint.config
    print_info(f"Calling {target} -> {config.method} {config.request_url}")

    try:
        result: Any = asyncio.run(endpoint(parse_data(data or [])))
    except EnvelopeError as e:
        print_error(f"Server reported failure: {e.envelope!r}")
        raise typer.Exit(1) from None
    except RequestError as e:
        if e.timeout:
            print_error("Request timed out.")
        else:
            print_error(f"Request failed (status {e.status}): {e.message}")
        raise typer.Exit(1) from None

    console.print_json(data=result)
