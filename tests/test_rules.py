"""Tests for deterministic, stochastic and context-sensitive rules."""

import random
from bisect import bisect_left

import pytest

from lindenmayer.core.errors import (
    ExhaustedStochasticSelectionError,
    InvalidArgumentError,
    InvalidProbabilityError,
)
from lindenmayer.core.rules import ContextSensitiveRule, DeterministicRule, StochasticRule
from lindenmayer.core.sequence import Sequence


class FixedRandom(random.Random):
    """Generator that always draws the same value and counts draws."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


def apply_at(rule, text: str, index: int) -> tuple[bool, str, int]:
    """Apply rule at index of text; return (rewritten, output, cursor position after)."""
    source = Sequence(text)
    cursor = source.cursor(index)
    output = Sequence()
    rewritten = rule.apply(cursor, output)
    assert str(source) == text
    return rewritten, str(output), cursor.position


# ============================================================================
# DeterministicRule
# ============================================================================


class TestDeterministicRule:
    def test_match_writes_production(self) -> None:
        rule = DeterministicRule("A", "AB")
        rewritten, output, position = apply_at(rule, "BAB", 1)
        assert rewritten is True
        assert output == "AB"
        assert position == 1

    def test_no_match_copies_symbol(self) -> None:
        rule = DeterministicRule("A", "AB")
        rewritten, output, _ = apply_at(rule, "BAB", 0)
        assert rewritten is False
        assert output == "B"

    def test_appends_to_existing_output(self) -> None:
        rule = DeterministicRule("F", "F+F")
        source = Sequence("F")
        output = Sequence("X")
        rule.apply(source.cursor(0), output)
        assert str(output) == "XF+F"

    def test_production_is_copied(self) -> None:
        production = Sequence("XY")
        rule = DeterministicRule("A", production)
        production.append("Z")
        assert rule.production == ("X", "Y")

    @pytest.mark.parametrize("production", [None, "", Sequence()])
    def test_empty_production_rejected(self, production) -> None:
        with pytest.raises(InvalidArgumentError):
            DeterministicRule("A", production)

    def test_trigger(self) -> None:
        assert DeterministicRule("A", "B").trigger == "A"

    def test_repr(self) -> None:
        assert repr(DeterministicRule("A", "AB")) == "DeterministicRule('A' -> 'AB')"


# ============================================================================
# StochasticRule
# ============================================================================


class TestStochasticRuleRegistration:
    def test_add_production(self) -> None:
        rule = StochasticRule("F", seed=1)
        assert rule.add_production("F+F", 0.5) is True
        assert rule.add_production("F-F", 1.0) is True
        assert rule.thresholds == (0.5, 1.0)

    def test_thresholds_kept_sorted(self) -> None:
        rule = StochasticRule("F", seed=1)
        rule.add_production("C", 1.0)
        rule.add_production("A", 0.2)
        rule.add_production("B", 0.7)
        assert rule.thresholds == (0.2, 0.7, 1.0)
        assert [p for _, p in rule.productions] == [("A",), ("B",), ("C",)]

    @pytest.mark.parametrize("threshold", [1.5, 0.0, -0.1, float("nan")])
    def test_out_of_range_threshold_not_added(self, threshold: float) -> None:
        rule = StochasticRule("F", seed=1)
        assert rule.add_production("F", threshold) is False
        assert rule.thresholds == ()

    def test_duplicate_threshold_not_added(self) -> None:
        rule = StochasticRule("F", seed=1)
        assert rule.add_production("A", 0.5) is True
        assert rule.add_production("B", 0.5) is False
        assert rule.productions == ((0.5, ("A",)),)

    def test_constructor_productions(self) -> None:
        rule = StochasticRule("F", {0.4: "A", 1.0: "B"}, seed=3)
        assert rule.thresholds == (0.4, 1.0)
        assert rule.is_complete

    def test_constructor_rejects_bad_threshold(self) -> None:
        with pytest.raises(InvalidProbabilityError):
            StochasticRule("F", {0.5: "A", 1.2: "B"}, seed=3)

    def test_invalid_probability_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            StochasticRule("F", {-1: "A"})

    def test_empty_production_rejected(self) -> None:
        rule = StochasticRule("F", seed=1)
        with pytest.raises(InvalidArgumentError):
            rule.add_production("", 0.5)

    def test_seed_and_rng_are_exclusive(self) -> None:
        with pytest.raises(InvalidArgumentError):
            StochasticRule("F", seed=1, rng=random.Random(1))

    def test_is_complete(self) -> None:
        rule = StochasticRule("F", seed=1)
        assert rule.is_complete is False
        rule.add_production("A", 0.5)
        assert rule.is_complete is False
        rule.add_production("B", 1.0)
        assert rule.is_complete is True


class TestStochasticRuleSelection:
    def test_selects_smallest_threshold_at_or_above_draw(self) -> None:
        seed = 1234
        rule = StochasticRule("F", {0.2: "A", 0.5: "B", 1.0: "C"}, seed=seed)
        reference = random.Random(seed)
        thresholds = [0.2, 0.5, 1.0]
        names = ["A", "B", "C"]

        for _ in range(50):
            expected = names[bisect_left(thresholds, reference.random())]
            assert str(rule.select_production()) == expected

    def test_draw_equal_to_threshold_selects_it(self) -> None:
        rule = StochasticRule("F", {0.5: "A", 1.0: "B"}, rng=FixedRandom(0.5))
        assert str(rule.select_production()) == "A"

    def test_zero_draw_selects_first(self) -> None:
        rule = StochasticRule("F", {0.5: "A", 1.0: "B"}, rng=FixedRandom(0.0))
        assert str(rule.select_production()) == "A"

    def test_draw_above_all_thresholds_is_reported(self) -> None:
        rule = StochasticRule("F", {0.5: "A"}, rng=FixedRandom(0.75))
        with pytest.raises(ExhaustedStochasticSelectionError) as exc_info:
            rule.select_production()
        assert exc_info.value.draw == 0.75
        assert exc_info.value.max_threshold == 0.5
        assert exc_info.value.trigger == "F"

    def test_no_productions_is_reported(self) -> None:
        rule = StochasticRule("F", rng=FixedRandom(0.1))
        with pytest.raises(ExhaustedStochasticSelectionError) as exc_info:
            rule.select_production()
        assert exc_info.value.max_threshold is None

    def test_same_seed_same_choices(self) -> None:
        productions = {0.3: "A", 0.6: "B", 1.0: "C"}
        first = StochasticRule("F", productions, seed=99)
        second = StochasticRule("F", productions, seed=99)
        draws_first = [str(first.select_production()) for _ in range(40)]
        draws_second = [str(second.select_production()) for _ in range(40)]
        assert draws_first == draws_second

    def test_reset_replays_draws(self) -> None:
        rule = StochasticRule("F", {0.3: "A", 0.6: "B", 1.0: "C"}, seed=11)
        before = [str(rule.select_production()) for _ in range(20)]
        rule.reset()
        after = [str(rule.select_production()) for _ in range(20)]
        assert before == after

    def test_caller_supplied_rng(self) -> None:
        rng = random.Random(5)
        rule = StochasticRule("F", {1.0: "A"}, rng=rng)
        assert rule.rng is rng
        assert rule.seed is None

    def test_apply_match_writes_selection(self) -> None:
        rule = StochasticRule("F", {0.5: "A", 1.0: "B"}, rng=FixedRandom(0.9))
        rewritten, output, position = apply_at(rule, "XFX", 1)
        assert rewritten is True
        assert output == "B"
        assert position == 1

    def test_apply_no_match_does_not_draw(self) -> None:
        rng = FixedRandom(0.9)
        rule = StochasticRule("F", {1.0: "A"}, rng=rng)
        rewritten, output, _ = apply_at(rule, "XFX", 0)
        assert rewritten is False
        assert output == "X"
        assert rng.calls == 0


# ============================================================================
# ContextSensitiveRule
# ============================================================================


class TestContextSensitiveRule:
    @pytest.fixture
    def rule(self) -> ContextSensitiveRule:
        return ContextSensitiveRule("X", "Y", left=["a", "b"], right=["c"])

    def test_matches_exact_context(self, rule: ContextSensitiveRule) -> None:
        rewritten, output, _ = apply_at(rule, "abXc", 2)
        assert rewritten is True
        assert output == "Y"

    @pytest.mark.parametrize("text", ["zbXc", "azXc", "abXz", "baXc"])
    def test_any_altered_context_passes_through(
        self, rule: ContextSensitiveRule, text: str
    ) -> None:
        rewritten, output, _ = apply_at(rule, text, 2)
        assert rewritten is False
        assert output == "X"

    def test_left_boundary_does_not_match(self, rule: ContextSensitiveRule) -> None:
        rewritten, output, _ = apply_at(rule, "bXc", 1)
        assert rewritten is False
        assert output == "X"

    def test_right_boundary_does_not_match(self, rule: ContextSensitiveRule) -> None:
        rewritten, output, _ = apply_at(rule, "abX", 2)
        assert rewritten is False
        assert output == "X"

    def test_trigger_mismatch(self, rule: ContextSensitiveRule) -> None:
        rewritten, output, _ = apply_at(rule, "abcc", 2)
        assert rewritten is False
        assert output == "c"

    @pytest.mark.parametrize("text,index", [("abXc", 2), ("zbXc", 2), ("bXc", 1), ("abX", 2)])
    def test_cursor_position_restored(
        self, rule: ContextSensitiveRule, text: str, index: int
    ) -> None:
        source = Sequence(text)
        cursor = source.cursor(index)
        rule.apply(cursor, Sequence())
        assert cursor.position == index
        assert cursor.current == "X"

    def test_shared_cursor_walk_is_not_corrupted(self, rule: ContextSensitiveRule) -> None:
        source = Sequence("abXcabXc")
        cursor = source.cursor()
        output = Sequence()
        visited = []
        while cursor.move_next():
            visited.append(cursor.position)
            rule.apply(cursor, output)
        assert visited == list(range(8))
        assert str(output) == "abYcabYc"

    def test_left_context_only(self) -> None:
        rule = ContextSensitiveRule("a", "b", left="b")
        assert apply_at(rule, "ba", 1)[1] == "b"
        assert apply_at(rule, "aa", 1)[1] == "a"
        assert apply_at(rule, "a", 0)[1] == "a"

    def test_right_context_only(self) -> None:
        rule = ContextSensitiveRule("a", "Z", right="cd")
        assert apply_at(rule, "acd", 0)[1] == "Z"
        assert apply_at(rule, "acx", 0)[1] == "a"
        assert apply_at(rule, "ac", 0)[1] == "a"

    def test_requires_some_context(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ContextSensitiveRule("a", "b")
        with pytest.raises(InvalidArgumentError):
            ContextSensitiveRule("a", "b", left=[], right=None)

    def test_requires_production(self) -> None:
        with pytest.raises(InvalidArgumentError):
            ContextSensitiveRule("a", "", left="b")

    def test_properties(self, rule: ContextSensitiveRule) -> None:
        assert rule.left == ("a", "b")
        assert rule.right == ("c",)
        assert rule.production == ("Y",)
        assert repr(rule) == "ContextSensitiveRule('ab' < 'X' > 'c' -> 'Y')"
