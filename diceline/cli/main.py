"""Main CLI application for rolling dice expressions."""

import logging
import random
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from diceline.cli.display import display_error, display_info, display_result
from diceline.config import get_settings
from diceline.dice.parser import DiceError
from diceline.dice.roller import roll_repeated


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="diceline",
    help="Roll dice from compact notation such as 2d6+3, 4d6d1 or d20e.",
    add_completion=False,
)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command(
    # Let expressions like -d6 through as arguments instead of options
    context_settings={"ignore_unknown_options": True},
)
def roll(
    expressions: Optional[list[str]] = typer.Argument(
        None, help="Dice expressions, e.g. 2d6+3 4d6d1x6 d20e"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for reproducible rolls"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parsing and rolling details"),
) -> None:
    """Roll each expression and print its result.

    Append xN to an expression to roll it N times. A malformed expression
    is reported and skipped; the rest are still rolled.
    """
    settings = get_settings()
    _configure_logging(verbose or settings.debug)

    if not expressions:
        display_info("Missing dice")
        raise typer.Exit(1)

    if seed is None:
        seed = settings.seed
    rng = random.Random(seed)

    failed = False
    for expression in expressions:
        try:
            results = roll_repeated(expression, rng, settings.max_dice_per_set)
        except DiceError as e:
            logger.debug(f"Skipping {expression!r}: {e}")
            display_error(f"{expression}: {e}")
            failed = True
            continue

        for result in results:
            display_result(result)

    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
