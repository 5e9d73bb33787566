"""Core abstractions for L-system rewriting."""

from lindenmayer.core.errors import (
    DuplicateRuleError,
    ExhaustedStochasticSelectionError,
    InvalidArgumentError,
    InvalidIndexError,
    InvalidProbabilityError,
    LSystemError,
    StaleCursorError,
)
from lindenmayer.core.registry import RuleRegistry
from lindenmayer.core.rules import ContextSensitiveRule, DeterministicRule, Rule, StochasticRule
from lindenmayer.core.sequence import Cursor, Sequence
from lindenmayer.core.symbolic import GenerationSnapshot, StepResult, Symbol

__all__ = [
    "ContextSensitiveRule",
    "Cursor",
    "DeterministicRule",
    "DuplicateRuleError",
    "ExhaustedStochasticSelectionError",
    "GenerationSnapshot",
    "InvalidArgumentError",
    "InvalidIndexError",
    "InvalidProbabilityError",
    "LSystemError",
    "Rule",
    "RuleRegistry",
    "Sequence",
    "StaleCursorError",
    "StepResult",
    "StochasticRule",
    "Symbol",
]
