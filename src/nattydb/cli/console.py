from rich.console import Console

__all__ = [
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_warning",
]

# stdout carries command results (tables, JSON) so they can be piped
console = Console()
"""Standard console for stdout."""

err_console = Console(stderr=True)
"""Error console for stderr."""


def print_error(message: str) -> None:
    """Print an error message to stderr with consistent styling."""
    err_console.print(f"[bold red]Error:[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a warning about the definitions file to stderr."""
    err_console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print a progress line, such as the request about to be sent, to stdout."""
    console.print(f"[blue]{message}[/blue]")
