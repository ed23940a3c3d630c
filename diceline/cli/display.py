"""Rich display helpers for CLI output."""

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from diceline.dice.formatter import format_result
from diceline.dice.types import RollResult


# Shared console instance
console = Console()

CRIT_STYLE = "bold green"
CRIT_FAIL_STYLE = "bold red"


def result_style(result: RollResult) -> str:
    """Pick the highlight style for a result ("" for ordinary rolls)."""
    if result.is_crit:
        return CRIT_STYLE
    if result.is_crit_fail:
        return CRIT_FAIL_STYLE
    return ""


def display_result(result: RollResult) -> None:
    """Display one roll result, highlighting crits and crit-fails.

    Args:
        result: The roll result to print.
    """
    console.print(Text(format_result(result), style=result_style(result)), soft_wrap=True)


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)


def display_info(message: str) -> None:
    """Display info message.

    Args:
        message: Info message.
    """
    console.print(f"[dim]{escape(message)}[/dim]")
