"""
Symbol types and generation records for the lindenmayer package.

A symbol is any hashable value; the helpers and presets use single
characters. Snapshots and step results describe the state of an
L-system after a rewrite.
"""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from ulid import ULID

Symbol = Hashable


def render(values: Iterable[Symbol]) -> str:
    """Concatenate symbols into a string."""
    return "".join(str(v) for v in values)


class GenerationSnapshot(BaseModel):
    """
    Immutable view of one generation of an L-system.

    Consumers such as renderers read the ordered symbols without
    holding a reference to the live sequence.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(ULID()))
    system: str
    generation: int = Field(ge=0)
    symbols: tuple[Symbol, ...] = Field(default_factory=tuple)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def length(self) -> int:
        return len(self.symbols)

    def as_string(self) -> str:
        """Return the symbols concatenated as a string."""
        return render(self.symbols)


@dataclass
class StepResult:
    """Result of a single rewrite pass."""

    generation: int
    input_length: int
    output_length: int
    rewrites: int
    started_at: datetime
    completed_at: datetime

    @property
    def duration_ms(self) -> float:
        """Pass duration in milliseconds."""
        delta = self.completed_at - self.started_at
        return delta.total_seconds() * 1000

    @property
    def growth(self) -> float:
        """Ratio of output length to input length."""
        if self.input_length == 0:
            return 0.0
        return self.output_length / self.input_length
