"""
lindenmayer

A Lindenmayer system (L-system) rewriting engine.

An axiom is rewritten generation by generation by per-symbol production
rules: deterministic, stochastic or context-sensitive. The rewritten
symbols are left for a renderer or any other consumer to interpret.
"""

__version__ = "0.1.0"

from lindenmayer.core.errors import (
    DuplicateRuleError,
    ExhaustedStochasticSelectionError,
    InvalidArgumentError,
    InvalidIndexError,
    InvalidProbabilityError,
    LSystemError,
    StaleCursorError,
)
from lindenmayer.core.rules import ContextSensitiveRule, DeterministicRule, Rule, StochasticRule
from lindenmayer.core.sequence import Cursor, Sequence
from lindenmayer.core.symbolic import GenerationSnapshot, StepResult
from lindenmayer.runtime.config import EngineConfig
from lindenmayer.runtime.orchestrator import LSystem, create_lsystem

__all__ = [
    "__version__",
    "ContextSensitiveRule",
    "Cursor",
    "DeterministicRule",
    "DuplicateRuleError",
    "EngineConfig",
    "ExhaustedStochasticSelectionError",
    "GenerationSnapshot",
    "InvalidArgumentError",
    "InvalidIndexError",
    "InvalidProbabilityError",
    "LSystem",
    "LSystemError",
    "Rule",
    "Sequence",
    "StaleCursorError",
    "StepResult",
    "StochasticRule",
    "create_lsystem",
]
