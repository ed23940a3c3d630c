"""Dice notation parser.

Parses compact dice notation such as 2d6+3, d20-d6-2, 4d6d1, d20e and
3d6m2r1 into a RollSpec.

Grammar per token (tokens are separated by + and -):
    [count]d<size>[d<drop>]  - die set, drop >0 lowest / <0 highest
    <int>                    - flat modifier
Suffixes may appear anywhere after the count:
    e         - exploding dice
    m<int>    - minimum value per die (last one wins)
    r<int>    - reroll this face (repeatable)
"""

import logging
import re

from diceline.dice.types import DieSet, DieSetSpec, Modifier, RollSpec, Term


logger = logging.getLogger(__name__)

_INT_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")

# Characters that end an m/r suffix's digit run
_SUFFIX_STOP = frozenset("rdm")


class DiceError(ValueError):
    """Base error for the dice system."""

    pass


class FormatError(DiceError):
    """A notation token could not be interpreted.

    Attributes:
        token: The offending token as written (lower-cased).
    """

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Instruction [{token}] was not formatted correctly")


def _to_int(text: str) -> int:
    if not _INT_PATTERN.match(text):
        raise ValueError(f"not an integer: {text!r}")
    return int(text)


def tokenize(text: str) -> list[tuple[str, str]]:
    """Split an expression into signed tokens.

    A sign with nothing buffered becomes the sign of the next token. A sign
    directly after a 'd' marker stays inside the token, so 4d6d-1 is one
    token.

    Args:
        text: Dice expression, e.g. "d20-d6-2+3".

    Returns:
        List of (sign, token) pairs where sign is "+" or "-".

    Examples:
        >>> tokenize("d20-d6-2+3")
        [('+', 'd20'), ('-', 'd6'), ('-', '2'), ('+', '3')]
        >>> tokenize("4d6d-1")
        [('+', '4d6d-1')]
    """
    tokens: list[tuple[str, str]] = []
    sign = "+"
    buffer: list[str] = []

    for char in text.lower():
        if char not in "+-":
            buffer.append(char)
            continue

        if not buffer:
            sign = char
            continue

        if buffer[-1] == "d":
            buffer.append(char)
            continue

        tokens.append((sign, "".join(buffer)))
        buffer = []
        sign = char

    tokens.append((sign, "".join(buffer)))
    return tokens


def _read_suffix(token: str, start: int) -> tuple[str, int]:
    """Read a suffix's digit run starting at ``start``.

    Returns the run (with any 'e' flags skipped) and the index just past it.
    """
    run: list[str] = []
    index = start
    while index < len(token) and token[index] not in _SUFFIX_STOP:
        if token[index] != "e":
            run.append(token[index])
        index += 1
    return "".join(run), index


def interpret_token(token: str, sign: str = "+") -> Term:
    """Interpret a single token as a modifier or a die set.

    Args:
        token: Token text without its leading sign, e.g. "4d6d1" or "5".
        sign: "+" or "-", applied to the modifier value or dice count.

    Returns:
        Modifier for a bare integer, DieSet otherwise.

    Raises:
        FormatError: If the token is not 1-3 'd'-separated integers once
            its suffixes are removed.

    Examples:
        >>> interpret_token("5", "-")
        Modifier(value=-5)
        >>> interpret_token("d20").spec.die_size
        20
    """
    text = token.lower()
    if text.startswith("d"):
        text = f"1{text}"

    exploding = "e" in text
    minimum = 0
    rerolls: set[int] = set()
    core: list[str] = []

    try:
        index = 0
        while index < len(text):
            char = text[index]
            if char == "e":
                index += 1
            elif char in "mr":
                run, index = _read_suffix(text, index + 1)
                if char == "m":
                    minimum = _to_int(run)
                else:
                    rerolls.add(_to_int(run))
            else:
                core.append(char)
                index += 1

        pieces = [_to_int(piece) for piece in "".join(core).split("d")]
    except ValueError as exc:
        raise FormatError(token) from exc

    negate = sign == "-"

    if len(pieces) == 1:
        return Modifier(-pieces[0] if negate else pieces[0])

    if len(pieces) not in (2, 3):
        raise FormatError(token)

    count, die_size = pieces[0], pieces[1]
    drop_count = pieces[2] if len(pieces) == 3 else 0

    # DieSetSpec requires a positive size and a non-zero count
    if count == 0 or die_size < 1:
        raise FormatError(token)

    return DieSet(
        DieSetSpec(
            die_size=die_size,
            signed_count=-count if negate else count,
            drop_count=drop_count,
            exploding=exploding,
            reroll_values=frozenset(rerolls),
            minimum=minimum,
        )
    )


def parse_notation(text: str) -> RollSpec:
    """Parse a dice expression into a RollSpec.

    Args:
        text: Dice expression (e.g., "2d10+3d6+5", "4d6d1", "d20e").

    Returns:
        RollSpec with die sets and modifiers in written order.

    Raises:
        FormatError: If any token is malformed.

    Examples:
        >>> parse_notation("2d6+3").modifiers
        (3,)
    """
    terms = [interpret_token(token, sign) for sign, token in tokenize(text)]
    spec = RollSpec.from_terms(terms)
    logger.debug(f"Parsed {text!r} into {len(spec.die_sets)} die set(s), modifiers {spec.modifiers}")
    return spec


def split_repeat(expression: str) -> tuple[str, int]:
    """Split the 'x<N>' repetition suffix off an expression.

    Args:
        expression: Expression such as "4d6d1x6".

    Returns:
        Tuple of (notation, repetitions). Repetitions is 1 without a suffix.

    Raises:
        FormatError: If the repetition count is not an integer.

    Examples:
        >>> split_repeat("4d6d1x6")
        ('4d6d1', 6)
        >>> split_repeat("d20")
        ('d20', 1)
    """
    lowered = expression.lower()
    if "x" not in lowered:
        return lowered, 1

    notation, _, count = lowered.partition("x")
    try:
        return notation, _to_int(count)
    except ValueError as exc:
        raise FormatError(count) from exc
