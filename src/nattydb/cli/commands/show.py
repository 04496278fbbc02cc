from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from nattydb.cli.console import console, print_warning
from nattydb.cli.utils import load_definitions
from nattydb.context import Context


def show_definitions(
    definitions_file: Annotated[Path, typer.Argument(help="Path to the JSON definitions file")],
    url_prefix: Annotated[
        str | None, typer.Option("--url-prefix", "-p", help="Prefix for relative urls")
    ] = None,
    mock: Annotated[
        bool | None, typer.Option("--mock/--no-mock", help="Context-wide mock default")
    ] = None,
) -> None:
    """
    Show the resolved configuration of every endpoint in a definitions file.
    """
    definitions = load_definitions(definitions_file)
    context = Context(url_prefix=url_prefix, mock=mock)
    if not definitions.api_names():
        print_warning(f"No APIs defined in {definitions_file}")
        return

    for api_name in definitions.api_names():
        api = context.create(api_name, definitions.root[api_name])
        if not api:
            print_warning(f"API {api_name!r} defines no endpoints")
            continue

        table = Table(title=api_name)
        table.add_column("Endpoint", style="cyan")
        table.add_column("Method", style="magenta")
        table.add_column("URL", style="green")
        table.add_column("Mock")
        table.add_column("JSONP")
        table.add_column("Timeout")

        for endpoint_name, endpoint in api.items():
            config = endpoint.config
            jsonp = str(config.jsonp)
            if config.jsonp_callback_query:
                jsonp += f" {config.jsonp_callback_query}"
            table.add_row(
                endpoint_name,
                config.method,
                config.request_url,
                str(config.mock),
                jsonp,
                f"{config.timeout}ms" if config.timeout else "-",
            )

        console.print(table)
