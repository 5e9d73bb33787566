"""Engine, configuration and preset models."""

from lindenmayer.runtime.config import EngineConfig
from lindenmayer.runtime.orchestrator import LSystem, create_lsystem
from lindenmayer.runtime.presets import PRESETS

__all__ = [
    "EngineConfig",
    "LSystem",
    "PRESETS",
    "create_lsystem",
]
