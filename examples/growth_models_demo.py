#!/usr/bin/env python3
"""
Example: Growth Models Demo

Demonstrates:
- Deterministic rewriting (Lindenmayer's algae)
- Context-sensitive rewriting (a signal travelling along a filament)
- Stochastic rewriting with a seeded generator, and replay after restart

Each generation is read from the engine as a plain symbol view; drawing
it is left to whatever consumes the symbols.
"""

from lindenmayer import ContextSensitiveRule, DeterministicRule, LSystem, StochasticRule


def main():
    print("=" * 60)
    print("Growth Models Demo")
    print("=" * 60)
    print()

    # =========================================================================
    # Step 1: Algae
    # =========================================================================
    print("Step 1: Algae (A -> AB, B -> A)")
    print("-" * 40)

    algae = LSystem("A", [DeterministicRule("A", "AB"), DeterministicRule("B", "A")])
    for _ in range(6):
        result = algae.step()
        print(f"  Gen {result.generation}: {algae.current}  (length {result.output_length})")
    print()

    # =========================================================================
    # Step 2: Signal propagation
    # =========================================================================
    print("Step 2: Signal Propagation (b < a -> b, b -> a)")
    print("-" * 40)

    signal = LSystem(
        "baaaaaaa",
        [ContextSensitiveRule("a", "b", left="b"), DeterministicRule("b", "a")],
    )
    print(f"  Gen 0: {signal.current}")
    for _ in range(8):
        signal.step()
        print(f"  Gen {signal.generation}: {signal.current}")
    print()

    # =========================================================================
    # Step 3: Stochastic plant
    # =========================================================================
    print("Step 3: Stochastic Plant (seed 7)")
    print("-" * 40)

    branch = StochasticRule(
        "F",
        {0.33: "F[+F]F[-F]F", 0.66: "F[+F]F", 1.0: "F[-F]F"},
        seed=7,
    )
    plant = LSystem("F", [branch])
    plant.step(2)
    first_run = plant.current
    print(f"  Gen 2: {first_run}")

    plant.restart(reseed=True)
    plant.step(2)
    print(f"  Replayed after restart: {plant.current == first_run}")

    snapshot = plant.snapshot()
    print(f"  Snapshot {snapshot.id[:8]}... generation={snapshot.generation} length={snapshot.length}")

    print()
    print("=" * 60)
    print("Example Complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
