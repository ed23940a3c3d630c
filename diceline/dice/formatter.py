"""Plain-text rendering of roll results.

Produces lines like:
    Result: 14 [6+5]-[2]+5 Dropped (1)
"""

from diceline.dice.types import DieRollOutcome, RollResult


def _format_outcome(outcome: DieRollOutcome) -> str:
    values = "+".join(str(abs(value)) for value in outcome.kept)
    prefix = "-" if outcome.negative else ""
    return f"{prefix}[{values}]"


def format_details(result: RollResult) -> str:
    """Render kept dice per set followed by the modifiers.

    Modifiers render as "0" when there are none.

    Examples:
        >>> format_details(RollResult(outcomes=(DieRollOutcome(kept=(3, 4)),), modifiers=(-2,), total=5))
        '[3+4]-2'
    """
    parts = [_format_outcome(outcome) for outcome in result.outcomes]
    if result.modifiers:
        parts.extend(str(modifier) for modifier in result.modifiers)
    else:
        parts.append("0")
    return "+".join(parts).replace("+-", "-")


def format_dropped(result: RollResult) -> str:
    """Render the dropped-dice suffix, or "" when nothing was dropped.

    With a single set dropping dice the values are listed flat; with
    several, every set gets its own bracketed group (empty ones included).
    """
    count = result.dropped_count
    if count == 0:
        return ""

    if count == 1:
        dropped = next(outcome.dropped for outcome in result.outcomes if outcome.dropped)
        return f" Dropped ({','.join(str(abs(value)) for value in dropped)})"

    groups = ", ".join(
        f"[{','.join(str(abs(value)) for value in outcome.dropped)}]"
        for outcome in result.outcomes
    )
    return f" Dropped ({groups})"


def format_result(result: RollResult) -> str:
    """Render a full result line: "Result: <total> <details><dropped>"."""
    return f"Result: {result.total} {format_details(result)}{format_dropped(result)}"
