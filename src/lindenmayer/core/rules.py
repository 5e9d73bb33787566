"""
Production rules for L-system rewriting.

Every rule has a single trigger symbol and one capability, apply(), which
reads the symbol under a cursor over the current generation and writes
either the rule's production or the unchanged symbol to an output
sequence. Three matching strategies are provided:

- DeterministicRule: trigger -> fixed production
- StochasticRule: trigger -> one of several productions picked by a
  seeded random draw against cumulative thresholds
- ContextSensitiveRule: trigger -> production, only when the neighbouring
  symbols equal the required left and right context

Rules never mutate the source sequence and never move the cursor they
are given.
"""

import random
from abc import ABC, abstractmethod
from bisect import bisect_left, insort
from collections.abc import Iterable, Mapping

import structlog

from lindenmayer.core.errors import (
    ExhaustedStochasticSelectionError,
    InvalidArgumentError,
    InvalidProbabilityError,
)
from lindenmayer.core.sequence import Cursor, Sequence
from lindenmayer.core.symbolic import Symbol, render

logger = structlog.get_logger()

ProductionLike = Sequence | str | Iterable[Symbol]


def as_production(value: ProductionLike | None) -> Sequence:
    """
    Build a rule-owned production sequence.

    Raises:
        InvalidArgumentError: value is None or empty
    """
    if value is None:
        raise InvalidArgumentError("Production cannot be None")
    production = value.clone() if isinstance(value, Sequence) else Sequence(value)
    if len(production) == 0:
        raise InvalidArgumentError("Production cannot be empty")
    return production


class Rule(ABC):
    """
    Abstract production rule bound to one trigger symbol.

    Subclasses decide whether the symbol under the cursor matches and
    which production to emit; apply() does the writing.
    """

    def __init__(self, trigger: Symbol) -> None:
        self._trigger = trigger

    @property
    def trigger(self) -> Symbol:
        return self._trigger

    @abstractmethod
    def matches(self, cursor: Cursor) -> bool:
        """Check whether the rule applies at the cursor's position."""
        ...

    @abstractmethod
    def select_production(self) -> Sequence:
        """Return the production to write for a match."""
        ...

    def apply(self, cursor: Cursor, output: Sequence) -> bool:
        """
        Rewrite the symbol under the cursor into output.

        Args:
            cursor: Cursor on a symbol of the generation being rewritten
            output: Sequence the next generation is being built in

        Returns:
            True if the production was written, False if the symbol
            was copied unchanged
        """
        symbol = cursor.current
        if self.matches(cursor):
            output.splice_at(len(output), self.select_production())
            return True
        output.append(symbol)
        return False


class DeterministicRule(Rule):
    """Rewrites every occurrence of the trigger with a fixed production."""

    def __init__(self, trigger: Symbol, production: ProductionLike) -> None:
        super().__init__(trigger)
        self._production = as_production(production)

    @property
    def production(self) -> tuple[Symbol, ...]:
        return self._production.to_tuple()

    def matches(self, cursor: Cursor) -> bool:
        return cursor.current == self._trigger

    def select_production(self) -> Sequence:
        return self._production

    def __repr__(self) -> str:
        return f"DeterministicRule({self._trigger!r} -> {render(self._production)!r})"


class StochasticRule(Rule):
    """
    Rewrites the trigger with a production chosen by weighted random draw.

    Productions are registered against cumulative thresholds in (0, 1].
    A draw r in [0, 1) selects the production with the smallest
    threshold >= r. The generator is explicit: pass a seed for a
    rule-owned generator, or a random.Random to share one the caller
    controls. Identical seeds give identical draw sequences.

    The generator is mutable state; do not share a rule instance between
    engines stepping concurrently.
    """

    def __init__(
        self,
        trigger: Symbol,
        productions: Mapping[float, ProductionLike] | None = None,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(trigger)
        if seed is not None and rng is not None:
            raise InvalidArgumentError("Pass either seed or rng, not both")

        self._seed = seed
        self._owns_rng = rng is None
        self._rng = rng if rng is not None else random.Random(seed)
        self._thresholds: list[float] = []
        self._productions: dict[float, Sequence] = {}
        self._log = logger.bind(component="stochastic_rule", trigger=trigger)

        for threshold, production in (productions or {}).items():
            reason = self._rejection_reason(threshold)
            if reason:
                raise InvalidProbabilityError(threshold, reason)
            self._insert(threshold, production)

    def _rejection_reason(self, threshold: float) -> str | None:
        if isinstance(threshold, bool) or not isinstance(threshold, int | float):
            return "must be a number"
        if not 0.0 < threshold <= 1.0:
            return "must be in (0, 1]"
        if float(threshold) in self._productions:
            return "already registered"
        return None

    def _insert(self, threshold: float, production: ProductionLike) -> None:
        sequence = as_production(production)
        key = float(threshold)
        insort(self._thresholds, key)
        self._productions[key] = sequence

    def add_production(self, production: ProductionLike, threshold: float) -> bool:
        """
        Register a production against a cumulative threshold.

        Returns:
            True if added, False if the threshold is outside (0, 1]
            or already registered
        """
        reason = self._rejection_reason(threshold)
        if reason:
            self._log.debug(
                "stochastic_production_rejected",
                threshold=threshold,
                reason=reason,
            )
            return False
        self._insert(threshold, production)
        return True

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def thresholds(self) -> tuple[float, ...]:
        return tuple(self._thresholds)

    @property
    def productions(self) -> tuple[tuple[float, tuple[Symbol, ...]], ...]:
        """(threshold, production) pairs in ascending threshold order."""
        return tuple((t, self._productions[t].to_tuple()) for t in self._thresholds)

    @property
    def is_complete(self) -> bool:
        """True when every draw in [0, 1) has a production."""
        return bool(self._thresholds) and self._thresholds[-1] == 1.0

    def reset(self) -> None:
        """Re-seed a rule-owned generator so the draw sequence replays."""
        if self._owns_rng:
            self._rng.seed(self._seed)

    def matches(self, cursor: Cursor) -> bool:
        return cursor.current == self._trigger

    def select_production(self) -> Sequence:
        """
        Draw r in [0, 1) and pick the production with the smallest threshold >= r.

        Raises:
            ExhaustedStochasticSelectionError: r exceeds every threshold
        """
        draw = self._rng.random()
        index = bisect_left(self._thresholds, draw)
        if index == len(self._thresholds):
            max_threshold = self._thresholds[-1] if self._thresholds else None
            raise ExhaustedStochasticSelectionError(self._trigger, draw, max_threshold)
        return self._productions[self._thresholds[index]]

    def __repr__(self) -> str:
        options = ", ".join(f"{t}: {render(p)!r}" for t, p in self.productions)
        return f"StochasticRule({self._trigger!r} -> {{{options}}}, seed={self._seed!r})"


class ContextSensitiveRule(Rule):
    """
    Rewrites the trigger only inside the required neighbourhood.

    ``left`` lists the symbols that must precede the trigger, with
    ``left[-1]`` the immediate predecessor; ``right`` lists the symbols
    that must follow it, with ``right[0]`` the immediate successor.
    A neighbourhood cut short by either end of the sequence never matches.
    """

    def __init__(
        self,
        trigger: Symbol,
        production: ProductionLike,
        left: Iterable[Symbol] | None = None,
        right: Iterable[Symbol] | None = None,
    ) -> None:
        super().__init__(trigger)
        self._production = as_production(production)
        self._left = tuple(left) if left is not None else ()
        self._right = tuple(right) if right is not None else ()
        if not self._left and not self._right:
            raise InvalidArgumentError(
                "Context-sensitive rule needs a left or right context"
            )

    @property
    def production(self) -> tuple[Symbol, ...]:
        return self._production.to_tuple()

    @property
    def left(self) -> tuple[Symbol, ...]:
        return self._left

    @property
    def right(self) -> tuple[Symbol, ...]:
        return self._right

    def _left_matches(self, cursor: Cursor) -> bool:
        probe = cursor.copy()
        for expected in reversed(self._left):
            if not probe.move_prev() or probe.current != expected:
                return False
        return True

    def _right_matches(self, cursor: Cursor) -> bool:
        probe = cursor.copy()
        for expected in self._right:
            if not probe.move_next() or probe.current != expected:
                return False
        return True

    def matches(self, cursor: Cursor) -> bool:
        return (
            cursor.current == self._trigger
            and self._left_matches(cursor)
            and self._right_matches(cursor)
        )

    def select_production(self) -> Sequence:
        return self._production

    def __repr__(self) -> str:
        return (
            f"ContextSensitiveRule({render(self._left)!r} < {self._trigger!r} > "
            f"{render(self._right)!r} -> {render(self._production)!r})"
        )
