"""Dice system type definitions.

Immutable dataclasses for parsed roll specifications and roll results.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DieSetSpec:
    """One group of same-sized dice rolled under a shared set of rules.

    Attributes:
        die_size: Number of faces on each die (e.g., 6 for d6).
        signed_count: Number of dice to roll. A negative count subtracts
            the set from the total.
        drop_count: 0 keeps everything, >0 drops that many lowest rolls,
            <0 drops that many highest rolls.
        exploding: Roll an extra die whenever the maximum face comes up.
        reroll_values: Faces that are always re-drawn.
        minimum: Rolls at or below this value count as this value.
    """

    die_size: int
    signed_count: int
    drop_count: int = 0
    exploding: bool = False
    reroll_values: frozenset[int] = field(default_factory=frozenset)
    minimum: int = 0

    @property
    def count(self) -> int:
        """Number of dice requested, ignoring sign."""
        return abs(self.signed_count)

    @property
    def is_negative(self) -> bool:
        """Whether this set is subtracted from the total."""
        return self.signed_count < 0


@dataclass(frozen=True)
class Modifier:
    """A flat signed value added to the total."""

    value: int


@dataclass(frozen=True)
class DieSet:
    """A die-set term wrapping its specification."""

    spec: DieSetSpec


Term = Modifier | DieSet


@dataclass(frozen=True)
class RollSpec:
    """A fully parsed dice expression.

    Attributes:
        die_sets: Die sets in the order they were written.
        modifiers: Flat modifiers in the order they were written.
    """

    die_sets: tuple[DieSetSpec, ...] = ()
    modifiers: tuple[int, ...] = ()

    @classmethod
    def from_terms(cls, terms: list[Term]) -> "RollSpec":
        """Build a spec from tokenizer terms, keeping relative order."""
        die_sets = tuple(t.spec for t in terms if isinstance(t, DieSet))
        modifiers = tuple(t.value for t in terms if isinstance(t, Modifier))
        return cls(die_sets=die_sets, modifiers=modifiers)


@dataclass(frozen=True)
class DieRollOutcome:
    """Kept and dropped values for a single die set.

    Values carry the set's sign and keep their original roll order.

    Attributes:
        kept: Values counted toward the total.
        dropped: Values discarded by the drop/keep rule.
        negative: Whether the set was subtracted.
    """

    kept: tuple[int, ...]
    dropped: tuple[int, ...] = ()
    negative: bool = False


@dataclass(frozen=True)
class RollResult:
    """Result of simulating a RollSpec once.

    Attributes:
        outcomes: One outcome per die set, in spec order.
        modifiers: Copy of the spec's modifiers.
        total: Sum of every kept value plus every modifier.
        is_crit: Every kept die rolled its set's maximum face.
        is_crit_fail: Every kept die rolled a 1.
    """

    outcomes: tuple[DieRollOutcome, ...]
    modifiers: tuple[int, ...]
    total: int
    is_crit: bool = False
    is_crit_fail: bool = False

    @property
    def dropped_count(self) -> int:
        """Number of die sets that dropped at least one value."""
        return sum(1 for outcome in self.outcomes if outcome.dropped)
