"""
LSystem: the generation-stepping engine.

Owns the axiom, the rule registry and a pair of sequences used as a
double buffer: each step reads the current generation through a cursor
and builds the next one in the scratch sequence, then swaps the two.
"""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

import structlog

from lindenmayer.core.errors import InvalidArgumentError, LSystemError
from lindenmayer.core.registry import RuleRegistry
from lindenmayer.core.rules import Rule
from lindenmayer.core.sequence import Sequence
from lindenmayer.core.symbolic import GenerationSnapshot, StepResult, Symbol, render
from lindenmayer.runtime.config import EngineConfig

logger = structlog.get_logger()


class LSystem:
    """
    Rewrites an axiom generation by generation.

    Generation 0 is the axiom; each step() advances by one. restart()
    returns to generation 0. Context checks always read the generation
    being rewritten, never the partially built next one, and the new
    generation only becomes visible once a pass has completed.

    Not safe for concurrent use; run parallel generations on independent
    engines with independent rule instances.
    """

    def __init__(
        self,
        axiom: Sequence | str | Iterable[Symbol],
        rules: Iterable[Rule] = (),
        config: EngineConfig | None = None,
    ) -> None:
        if axiom is None:
            raise InvalidArgumentError("Axiom cannot be None")

        self._config = config or EngineConfig()
        self._axiom = axiom.clone() if isinstance(axiom, Sequence) else Sequence(axiom)
        self._current = self._axiom.clone()
        self._scratch = Sequence()
        self._rules = RuleRegistry()
        self._generation = 0
        self._history: list[StepResult] = []
        self._log = logger.bind(component="lsystem", system=self._config.name)

        for rule in rules:
            self.add_rule(rule)

        self._log.debug("lsystem_created", axiom_length=len(self._axiom))

    # --- Properties ---

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def axiom(self) -> tuple[Symbol, ...]:
        return self._axiom.to_tuple()

    @property
    def rules(self) -> RuleRegistry:
        return self._rules

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def current(self) -> str:
        """Current generation rendered as a string."""
        return render(self._current)

    @property
    def history(self) -> list[StepResult]:
        """Results of recent steps, oldest first."""
        return list(self._history)

    # --- Rules ---

    def add_rule(self, rule: Rule, metadata: dict[str, Any] | None = None) -> None:
        """
        Register a rule for its trigger symbol.

        Raises:
            DuplicateRuleError: the trigger already has a rule
        """
        self._rules.register(rule, metadata)

    def add_rules(self, *rules: Rule) -> None:
        for rule in rules:
            self.add_rule(rule)

    # --- Stepping ---

    def step(self, count: int = 1) -> StepResult | None:
        """
        Advance the system by count generations.

        Args:
            count: Number of rewrite passes to apply

        Returns:
            Result of the last pass, or None when count is 0

        Raises:
            InvalidArgumentError: count is negative
        """
        if count < 0:
            raise InvalidArgumentError(f"Step count must be >= 0, got {count}")

        result: StepResult | None = None
        for _ in range(count):
            result = self._step_once()
        return result

    def _step_once(self) -> StepResult:
        started_at = datetime.now(UTC)
        scratch = self._scratch
        limit = self._config.max_length
        rewrites = 0

        scratch.clear()
        cursor = self._current.cursor()

        try:
            while cursor.move_next():
                symbol = cursor.current
                rule = self._rules.get(symbol)
                if rule is None:
                    scratch.append(symbol)
                elif rule.apply(cursor, scratch):
                    rewrites += 1

                if limit is not None and len(scratch) > limit:
                    raise InvalidArgumentError(
                        f"Generation {self._generation + 1} exceeds max_length {limit}"
                    )
        except LSystemError:
            scratch.clear()
            self._log.exception("step_failed", generation=self._generation + 1)
            raise

        self._current, self._scratch = scratch, self._current
        self._generation += 1

        result = StepResult(
            generation=self._generation,
            input_length=len(self._scratch),
            output_length=len(self._current),
            rewrites=rewrites,
            started_at=started_at,
            completed_at=datetime.now(UTC),
        )
        self._record(result)

        self._log.debug(
            "generation_stepped",
            generation=self._generation,
            length=result.output_length,
            rewrites=rewrites,
        )
        return result

    def _record(self, result: StepResult) -> None:
        if self._config.max_history == 0:
            return
        self._history.append(result)
        if len(self._history) > self._config.max_history:
            self._history.pop(0)

    def restart(self, *, reseed: bool = False) -> None:
        """
        Return to generation 0.

        Args:
            reseed: Also re-seed every stochastic rule so the run replays
        """
        self._scratch.clear()
        self._current.clear()
        self._current = self._axiom.clone()
        self._generation = 0
        self._history.clear()

        if reseed:
            for rule in self._rules.get_stochastic():
                rule.reset()

        self._log.info("lsystem_restarted", reseed=reseed)

    # --- Read access ---

    def current_snapshot(self) -> tuple[Symbol, ...]:
        """Ordered, read-only view of the current generation."""
        return self._current.to_tuple()

    def snapshot(self) -> GenerationSnapshot:
        """Current generation as an immutable snapshot model."""
        return GenerationSnapshot(
            system=self._config.name,
            generation=self._generation,
            symbols=self._current.to_tuple(),
        )

    def __repr__(self) -> str:
        return (
            f"LSystem(name={self._config.name!r}, generation={self._generation}, "
            f"length={len(self._current)}, rules={len(self._rules)})"
        )


def create_lsystem(
    axiom: Sequence | str | Iterable[Symbol],
    rules: Iterable[Rule] = (),
    **settings: Any,
) -> LSystem:
    """Create an LSystem, passing keyword settings to EngineConfig."""
    return LSystem(axiom, rules, EngineConfig(**settings))
