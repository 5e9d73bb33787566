"""
Exception hierarchy for the lindenmayer package.

Every error derives from LSystemError and from the closest built-in
exception, so callers can catch either the package base class or the
usual Python category (IndexError, ValueError, ...).
"""


class LSystemError(Exception):
    """Base class for all L-system errors."""


class InvalidIndexError(LSystemError, IndexError):
    """An index is outside the valid bounds of a sequence operation."""

    def __init__(self, index: int, length: int, *, inclusive: bool = False) -> None:
        upper = f"{length}]" if inclusive else f"{length})"
        super().__init__(f"Index {index} out of range [0, {upper}")
        self.index = index
        self.length = length


class InvalidArgumentError(LSystemError, ValueError):
    """A required value (production, splice input, context) is missing or empty."""


class DuplicateRuleError(LSystemError, ValueError):
    """A rule is already registered for the trigger symbol."""

    def __init__(self, trigger: object) -> None:
        super().__init__(f"Rule for symbol {trigger!r} already registered")
        self.trigger = trigger


class InvalidProbabilityError(LSystemError, ValueError):
    """A stochastic threshold is outside (0, 1] or already registered."""

    def __init__(self, threshold: float, reason: str) -> None:
        super().__init__(f"Invalid threshold {threshold!r}: {reason}")
        self.threshold = threshold
        self.reason = reason


class ExhaustedStochasticSelectionError(LSystemError, LookupError):
    """A random draw exceeded every registered cumulative threshold."""

    def __init__(self, trigger: object, draw: float, max_threshold: float | None) -> None:
        if max_threshold is None:
            message = f"No productions registered for stochastic rule {trigger!r}"
        else:
            message = (
                f"Draw {draw:.6f} exceeds largest threshold {max_threshold} "
                f"for stochastic rule {trigger!r}"
            )
        super().__init__(message)
        self.trigger = trigger
        self.draw = draw
        self.max_threshold = max_threshold


class StaleCursorError(LSystemError, RuntimeError):
    """A cursor was used after its sequence was structurally modified."""
