"""CLI application using Typer."""

import sys

import typer

from nattydb.cli.commands.call import call_endpoint
from nattydb.cli.commands.show import show_definitions
from nattydb.cli.console import print_error
from nattydb.exceptions import NattyDBError

__all__ = ["app", "main"]

app = typer.Typer(
    name="nattydb",
    help="Inspect and call APIs declared in NattyDB definition files.",
    add_completion=True,
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """
    NattyDB CLI entry point.
    """
    from nattydb.logging import configure_logging

    configure_logging("DEBUG" if verbose else None)


app.command(name="show")(show_definitions)
app.command(name="call")(call_endpoint)


def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except NattyDBError as e:
        print_error(e.message)
        sys.exit(e.exit_code)
    except Exception as e:
        print_error(f"An unexpected error occurred: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
