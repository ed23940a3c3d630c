"""Core dice rolling engine.

Simulates a parsed RollSpec against a random source:
- rerolls listed faces until a non-listed face comes up
- clamps low rolls up to the set's minimum
- chains exploding dice while the maximum face keeps coming up
- drops the lowest or highest rolls per set
- derives the total and the crit / crit-fail flags

All randomness comes from an explicitly passed RandomSource, so seeded
sources give reproducible results.
"""

import logging
import random
from typing import Protocol

from diceline.dice.parser import DiceError, parse_notation, split_repeat
from diceline.dice.types import DieRollOutcome, DieSetSpec, RollResult, RollSpec


logger = logging.getLogger(__name__)

# Requested dice beyond this many per set are not rolled
MAX_DICE_PER_SET = 150_000


class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [a, b], like random.Random."""

    def randint(self, a: int, b: int) -> int: ...


class UnboundedRollError(DiceError):
    """A die set can never finish rolling.

    Raised when every face is in the reroll list, or when the set explodes
    and its maximum is the only face that is not rerolled.
    """

    def __init__(self, spec: DieSetSpec, reason: str):
        self.spec = spec
        super().__init__(f"d{spec.die_size} {reason}")


def _check_terminates(spec: DieSetSpec) -> None:
    rerolled = {value for value in spec.reroll_values if 1 <= value <= spec.die_size}
    if len(rerolled) == spec.die_size:
        raise UnboundedRollError(spec, "rerolls every face")
    if (
        spec.exploding
        and len(rerolled) == spec.die_size - 1
        and spec.die_size not in rerolled
    ):
        raise UnboundedRollError(spec, "explodes on every roll")


def _draw(spec: DieSetSpec, rng: RandomSource) -> int:
    value = rng.randint(1, spec.die_size)
    while value in spec.reroll_values:
        value = rng.randint(1, spec.die_size)
    return value


def _roll_raw(spec: DieSetSpec, rng: RandomSource, max_dice: int | None) -> list[int]:
    """Roll every die in the set, explosion chains included, in roll order."""
    if max_dice is None:
        max_dice = MAX_DICE_PER_SET
    count = spec.count
    if count > max_dice:
        logger.warning(f"Rolling only {max_dice} of {count} requested d{spec.die_size}")
        count = max_dice

    raw: list[int] = []
    for _ in range(count):
        while True:
            value = _draw(spec, rng)
            raw.append(spec.minimum if value <= spec.minimum else value)
            # Explosion compares the drawn face, not the clamped contribution
            if not (spec.exploding and value == spec.die_size):
                break
    return raw


def _split_drops(raw: list[int], drop_count: int) -> tuple[list[int], list[int]]:
    """Split rolls into (kept, dropped), both in original roll order.

    Ties are broken by roll order: earlier dice count as lower.
    """
    if drop_count == 0:
        return list(raw), []

    by_value = sorted(range(len(raw)), key=lambda i: raw[i])
    n = min(abs(drop_count), len(raw))
    if drop_count > 0:
        dropped_indexes = set(by_value[:n])
    else:
        dropped_indexes = set(by_value[len(by_value) - n:])

    kept = [value for i, value in enumerate(raw) if i not in dropped_indexes]
    dropped = [value for i, value in enumerate(raw) if i in dropped_indexes]
    return kept, dropped


def roll_die_set(
    spec: DieSetSpec,
    rng: RandomSource,
    max_dice: int | None = None,
) -> tuple[list[int], list[int]]:
    """Roll one die set and apply its drop rule.

    Args:
        spec: The die set to roll.
        rng: Source of random integers.
        max_dice: Ceiling on requested dice for the set; MAX_DICE_PER_SET
            when omitted.

    Returns:
        Tuple of (kept, dropped) unsigned values in roll order.

    Raises:
        UnboundedRollError: If the set could never finish rolling.

    Examples:
        >>> kept, dropped = roll_die_set(DieSetSpec(die_size=6, signed_count=4, drop_count=1), random.Random(1))
        >>> len(kept), len(dropped)
        (3, 1)
    """
    _check_terminates(spec)
    raw = _roll_raw(spec, rng, max_dice)
    kept, dropped = _split_drops(raw, spec.drop_count)
    logger.debug(f"d{spec.die_size} x{spec.signed_count}: kept {kept}, dropped {dropped}")
    return kept, dropped


def simulate(
    spec: RollSpec,
    rng: RandomSource,
    max_dice_per_set: int | None = None,
) -> RollResult:
    """Roll every die set in a spec and total the result.

    Crit flags start set and are cleared by any kept die (across all sets)
    below its maximum / above 1. If both survive, the expression had no
    die that can tell them apart (e.g. only d1s) and both are cleared.

    Args:
        spec: Parsed roll specification.
        rng: Source of random integers.
        max_dice_per_set: Ceiling on requested dice per set; MAX_DICE_PER_SET
            when omitted.

    Returns:
        RollResult with per-set outcomes, total and crit flags.

    Raises:
        UnboundedRollError: If a set could never finish rolling.
    """
    outcomes: list[DieRollOutcome] = []
    is_crit = True
    is_crit_fail = True

    for die_set in spec.die_sets:
        kept, dropped = roll_die_set(die_set, rng, max_dice_per_set)

        if any(value < die_set.die_size for value in kept):
            is_crit = False
        if any(value > 1 for value in kept):
            is_crit_fail = False

        if die_set.is_negative:
            kept = [-value for value in kept]
            dropped = [-value for value in dropped]

        outcomes.append(
            DieRollOutcome(
                kept=tuple(kept),
                dropped=tuple(dropped),
                negative=die_set.is_negative,
            )
        )

    if is_crit and is_crit_fail:
        is_crit = False
        is_crit_fail = False

    total = sum(sum(outcome.kept) for outcome in outcomes) + sum(spec.modifiers)

    return RollResult(
        outcomes=tuple(outcomes),
        modifiers=tuple(spec.modifiers),
        total=total,
        is_crit=is_crit,
        is_crit_fail=is_crit_fail,
    )


def roll(notation: str, rng: RandomSource | None = None) -> RollResult:
    """Parse dice notation and roll it once.

    Convenience function combining parse_notation and simulate.

    Args:
        notation: Dice notation string (e.g., "2d6+3").
        rng: Source of random integers; a fresh random.Random if omitted.

    Returns:
        RollResult for one simulation.

    Raises:
        FormatError: If notation is invalid.

    Examples:
        >>> roll("1d1+5").total
        6
    """
    return simulate(parse_notation(notation), rng or random.Random())


def roll_repeated(
    expression: str,
    rng: RandomSource | None = None,
    max_dice_per_set: int | None = None,
) -> list[RollResult]:
    """Roll an expression with an optional 'x<N>' repetition suffix.

    The notation is parsed once and simulated N times.

    Args:
        expression: Expression such as "4d6d1x6" or "d20".
        rng: Source of random integers; a fresh random.Random if omitted.
        max_dice_per_set: Ceiling on requested dice per set; MAX_DICE_PER_SET
            when omitted.

    Returns:
        One RollResult per repetition.

    Raises:
        FormatError: If the notation or repetition count is invalid.
    """
    notation, repetitions = split_repeat(expression)
    spec = parse_notation(notation)
    rng = rng or random.Random()
    return [simulate(spec, rng, max_dice_per_set) for _ in range(repetitions)]
