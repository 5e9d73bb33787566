"""
Rule registry for the lindenmayer package.

Maps each trigger symbol to at most one production rule. Symbols without
a registered rule are constants and are copied unchanged by the engine.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

import structlog

from lindenmayer.core.errors import DuplicateRuleError
from lindenmayer.core.rules import Rule, StochasticRule
from lindenmayer.core.symbolic import Symbol

logger = structlog.get_logger()


@dataclass
class RegistryEntry:
    """A registered rule."""

    rule: Rule
    registered_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    metadata: dict[str, Any] = field(default_factory=dict)


class RuleRegistry:
    """
    Registry of production rules keyed by trigger symbol.

    Registration is one-way per trigger: a second rule for a claimed
    symbol is rejected and the registry is left unchanged.
    """

    def __init__(self) -> None:
        self._entries: dict[Symbol, RegistryEntry] = {}
        self._log = logger.bind(component="rule_registry")

    def register(
        self,
        rule: Rule,
        metadata: dict[str, Any] | None = None,
    ) -> Symbol:
        """
        Register a rule under its trigger symbol.

        Args:
            rule: Rule instance to register
            metadata: Optional additional metadata

        Returns:
            The trigger symbol

        Raises:
            TypeError: rule is not a Rule
            DuplicateRuleError: the trigger already has a rule
        """
        if not isinstance(rule, Rule):
            raise TypeError(f"Expected Rule, got {type(rule)}")

        trigger = rule.trigger
        if trigger in self._entries:
            raise DuplicateRuleError(trigger)

        self._entries[trigger] = RegistryEntry(rule=rule, metadata=metadata or {})

        self._log.debug(
            "rule_registered",
            trigger=trigger,
            rule_type=type(rule).__name__,
        )

        return trigger

    def unregister(self, trigger: Symbol) -> bool:
        """
        Remove the rule for a trigger.

        Returns:
            True if a rule was removed
        """
        entry = self._entries.pop(trigger, None)
        if not entry:
            return False
        self._log.debug("rule_unregistered", trigger=trigger)
        return True

    def get(self, trigger: Symbol) -> Rule | None:
        """Get the rule for a trigger symbol."""
        entry = self._entries.get(trigger)
        return entry.rule if entry else None

    def get_entry(self, trigger: Symbol) -> RegistryEntry | None:
        """Get the full registry entry for a trigger symbol."""
        return self._entries.get(trigger)

    def get_stochastic(self) -> list[StochasticRule]:
        """Get all registered stochastic rules."""
        return [e.rule for e in self._entries.values() if isinstance(e.rule, StochasticRule)]

    def list_triggers(self) -> list[Symbol]:
        """List all trigger symbols in registration order."""
        return list(self._entries.keys())

    def clear(self) -> int:
        """Clear all registry entries."""
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Rule]:
        return iter(entry.rule for entry in self._entries.values())

    def __contains__(self, trigger: object) -> bool:
        return trigger in self._entries
