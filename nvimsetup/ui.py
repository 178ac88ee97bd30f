from typing import Optional

from rich.console import Console

# Shared Rich console for colored output
console = Console()


def print_header(action: str, subject: str, color: str = "cyan", items: Optional[list[str]] = None):
    """Print a styled header for a phase"""
    if items:
        item_list = ", ".join(items) if len(items) <= 3 else f"{len(items)} packages"
        console.print(
            f"\n[bold {color}]▶ {action.capitalize()}[/] [{color}]{subject}[/]: {item_list}"
        )
    else:
        console.print(f"\n[bold {color}]▶ {action.capitalize()}[/] [{color}]{subject}[/]")


def print_success(message: str = "Done"):
    """Print a success message"""
    console.print(f"[green]✓[/] {message}")


def print_warning(message: str):
    console.print(f"[yellow]○[/] {message}")


def print_error(message: str):
    """Print an error message"""
    console.print(f"[red]✗[/] {message}")
