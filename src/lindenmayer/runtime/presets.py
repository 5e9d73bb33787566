"""
Classic L-system models.

Each factory returns a fresh LSystem at generation 0 with its own rule
instances, so presets can be stepped independently. Keyword settings are
passed through to EngineConfig.
"""

from collections.abc import Callable
from typing import Any

from lindenmayer.core.errors import InvalidArgumentError
from lindenmayer.core.rules import ContextSensitiveRule, DeterministicRule, StochasticRule
from lindenmayer.runtime.orchestrator import LSystem, create_lsystem


def _settings(name: str, settings: dict[str, Any]) -> dict[str, Any]:
    return {"name": name, **settings}


def algae(**settings: Any) -> LSystem:
    """Lindenmayer's original algae model: A -> AB, B -> A."""
    return create_lsystem(
        "A",
        [DeterministicRule("A", "AB"), DeterministicRule("B", "A")],
        **_settings("algae", settings),
    )


def koch_curve(**settings: Any) -> LSystem:
    """Quadratic Koch curve."""
    return create_lsystem(
        "F",
        [DeterministicRule("F", "F+F-F-F+F")],
        **_settings("koch_curve", settings),
    )


def sierpinski_triangle(**settings: Any) -> LSystem:
    return create_lsystem(
        "F-G-G",
        [DeterministicRule("F", "F-G+F+G-F"), DeterministicRule("G", "GG")],
        **_settings("sierpinski_triangle", settings),
    )


def fractal_plant(**settings: Any) -> LSystem:
    """Bracketed plant; X drives growth, F draws."""
    return create_lsystem(
        "X",
        [
            DeterministicRule("X", "F+[[X]-X]-F[-FX]+X"),
            DeterministicRule("F", "FF"),
        ],
        **_settings("fractal_plant", settings),
    )


def stochastic_plant(seed: int | None = None, **settings: Any) -> LSystem:
    """Plant whose branches pick one of three shapes with equal weight."""
    rule = StochasticRule(
        "F",
        {
            0.33: "F[+F]F[-F]F",
            0.66: "F[+F]F",
            1.0: "F[-F]F",
        },
        seed=seed,
    )
    return create_lsystem("F", [rule], **_settings("stochastic_plant", settings))


def signal_propagation(width: int = 8, **settings: Any) -> LSystem:
    """
    A signal b travelling rightwards through a row of a.

    b < a -> b moves the signal one cell per generation; b -> a clears
    the cell it leaves.
    """
    if width < 1:
        raise InvalidArgumentError(f"width must be at least 1, got {width}")
    return create_lsystem(
        "b" + "a" * (width - 1),
        [
            ContextSensitiveRule("a", "b", left="b"),
            DeterministicRule("b", "a"),
        ],
        **_settings("signal_propagation", settings),
    )


PRESETS: dict[str, Callable[..., LSystem]] = {
    "algae": algae,
    "koch_curve": koch_curve,
    "sierpinski_triangle": sierpinski_triangle,
    "fractal_plant": fractal_plant,
    "stochastic_plant": stochastic_plant,
    "signal_propagation": signal_propagation,
}
