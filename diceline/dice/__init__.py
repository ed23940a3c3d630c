"""Dice notation parsing and rolling.

Usage:
    >>> import random
    >>> from diceline.dice import parse_notation, simulate, format_result
    >>> spec = parse_notation("4d6d1+2")
    >>> result = simulate(spec, random.Random(7))
    >>> len(result.outcomes[0].kept)
    3
"""

# Types
from diceline.dice.types import (
    DieRollOutcome,
    DieSet,
    DieSetSpec,
    Modifier,
    RollResult,
    RollSpec,
    Term,
)

# Parser
from diceline.dice.parser import (
    DiceError,
    FormatError,
    interpret_token,
    parse_notation,
    split_repeat,
    tokenize,
)

# Roller
from diceline.dice.roller import (
    MAX_DICE_PER_SET,
    RandomSource,
    UnboundedRollError,
    roll,
    roll_die_set,
    roll_repeated,
    simulate,
)

# Formatting
from diceline.dice.formatter import format_details, format_dropped, format_result

__all__ = [
    # Types
    "DieRollOutcome",
    "DieSet",
    "DieSetSpec",
    "Modifier",
    "RollResult",
    "RollSpec",
    "Term",
    # Parser
    "DiceError",
    "FormatError",
    "interpret_token",
    "parse_notation",
    "split_repeat",
    "tokenize",
    # Roller
    "MAX_DICE_PER_SET",
    "RandomSource",
    "UnboundedRollError",
    "roll",
    "roll_die_set",
    "roll_repeated",
    "simulate",
    # Formatting
    "format_details",
    "format_dropped",
    "format_result",
]
