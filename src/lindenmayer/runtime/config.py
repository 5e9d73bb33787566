"""Engine configuration."""

from pydantic import BaseModel, ConfigDict, Field


class EngineConfig(BaseModel):
    """Settings for an LSystem engine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = "lsystem"
    max_history: int = Field(default=100, ge=0)  # StepResults retained
    max_length: int | None = Field(default=None, gt=0)  # None = unbounded growth
