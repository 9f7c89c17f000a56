"""Colorful CLI output helpers."""

from rich.console import Console

CHECK = "✓"
BULLET = "•"
CROSS = "✗"

# Rich drops markup styling when stdout isn't a terminal
console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


def success(message: str) -> None:
    """Print success message with green checkmark."""
    console.print(f"[green]{CHECK}[/] {message}")


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    console.print(f"[yellow]{BULLET}[/] {message}")


def header(message: str) -> None:
    """Print header message in blue."""
    console.print(f"[bold blue]{message}[/]")


def error(message: str) -> None:
    """Print error message with red cross to stderr."""
    error_console.print(f"[red]{CROSS}[/] {message}")
