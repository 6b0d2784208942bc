"""Tests for leaf predicates."""

import pytest

from factsmith import (
    BudgetExhausted,
    Generator,
    UserError,
    always,
    consecutive_int,
    different,
    eq,
    in_range,
    in_slice,
    ne,
    never,
    not_,
    same,
    vec,
)


class TestConstant:
    """Test always and never."""

    def test_always(self):
        """Test that always passes anything."""
        fact = always()
        for value in [0, "x", None, [1, 2]]:
            assert fact.check(value).is_ok()

    def test_never_check(self):
        """Test that never fails with its label."""
        assert never("nothing allowed").check(1).failures == ["never: nothing allowed"]

    def test_never_build(self, g):
        """Test that building with never exhausts satisfy."""
        with pytest.raises(BudgetExhausted) as exc_info:
            never("nothing allowed").build(g, int)
        assert exc_info.value.limit == 7
        assert exc_info.value.last_failures == ["never: nothing allowed"]


class TestEquality:
    """Test eq and ne."""

    def test_eq_check(self):
        """Test equality checking and its message."""
        assert eq(1).check(1).is_ok()
        assert eq(1).check(2).failures == ["eq(1): expected 2 == 1"]

    def test_eq_custom_label(self):
        """Test a custom label in the message."""
        assert eq("a", "name").check("b").failures == ["name: expected 'b' == 'a'"]

    def test_eq_build(self, g):
        """Test that eq builds its constant from the constant's type."""
        assert eq(1).build(g) == 1
        assert eq("hello").build(g) == "hello"

    def test_ne_check(self):
        """Test inequality checking."""
        assert ne(1).check(2).is_ok()
        check = ne(1).check(1)
        assert check.is_err()
        assert not check.is_internal_error()

    def test_ne_build(self, g):
        """Test that ne never builds the excluded value."""
        values = vec(ne(1)).satisfy(g, [1] * 10)
        assert len(values) == 10
        assert 1 not in values


class TestRange:
    """Test in_range."""

    def test_bounds_inclusive(self):
        """Test both ends of the range."""
        fact = in_range("small", 0, 10)
        assert fact.check(0).is_ok()
        assert fact.check(10).is_ok()
        assert fact.check(-1).is_err()
        assert fact.check(11).is_err()

    def test_open_ended(self, g):
        """Test a range with only a lower bound."""
        fact = in_range("must be positive", 1)
        assert fact.check(0).is_err()
        for _ in range(20):
            assert fact.build(g) >= 1

    def test_builtin_range(self, g):
        """Test passing a range object."""
        fact = in_range("digit", range(10))
        assert fact.check(9).is_ok()
        assert fact.check(10).is_err()
        assert 0 <= fact.build(g) <= 9

    def test_message(self):
        """Test the failure message names the range."""
        (failure,) = in_range("small", 0, 10).check(11).failures
        assert failure == "small: expected 11 to be within [0, 10]"

    def test_reversed_range(self):
        """Test that a reversed range is rejected."""
        with pytest.raises(UserError):
            in_range("bad", 10, 0)
        with pytest.raises(UserError):
            in_range("bad", range(0, 10, 2))

    def test_build_many(self, g):
        """Test that every built value is in range."""
        values = vec(in_range("small", -10, 99)).satisfy(g, [1000] * 50)
        assert all(-10 <= v <= 99 for v in values)

    def test_negated_range(self, g):
        """Test building outside of a range."""
        fact = not_(in_range("positive", 1))
        for _ in range(10):
            assert fact.build(g) <= 0


class TestSlice:
    """Test in_slice."""

    def test_check(self):
        """Test membership checking."""
        fact = in_slice("colors", ["red", "green"])
        assert fact.check("red").is_ok()
        (failure,) = fact.check("blue").failures
        assert "colors" in failure
        assert "'blue'" in failure

    def test_build(self, g):
        """Test that built values are members."""
        for _ in range(10):
            assert in_slice("small primes", [2, 3, 5, 7]).build(g) in [2, 3, 5, 7]

    def test_single_option_check_fails(self):
        """Test that a miss fails in check mode even with one option."""
        assert in_slice("only", [1]).check(2).is_err()

    def test_empty_options(self):
        """Test that an empty option list is a user error."""
        check = in_slice("none", []).check(1)
        assert check.is_internal_error()


class TestConsecutiveInt:
    """Test the counter predicate."""

    def test_sequence(self, g):
        """Test that a counter builds an increasing sequence."""
        assert vec(consecutive_int("counter", 0)).satisfy(g, [0] * 5) == [0, 1, 2, 3, 4]

    def test_check(self):
        """Test checking a sequence of counter values."""
        fact = vec(consecutive_int("counter", 3))
        assert fact.check([3, 4, 5]).is_ok()
        assert fact.check([3, 5, 6]).failures == [
            "item 1: counter: expected 4, got 5",
            "item 2: counter: expected 4, got 6",
        ]

    def test_check_leaves_state(self):
        """Test that checking never advances the counter."""
        fact = consecutive_int("counter", 0)
        assert fact.check(0).is_ok()
        assert fact.check(0).is_ok()
        assert fact.counter == 0

    def test_satisfy_commits_state(self, g):
        """Test that a successful satisfy advances the counter."""
        fact = consecutive_int("counter", 0)
        assert fact.satisfy(g, 99) == 0
        assert fact.satisfy(g, 99) == 1


class TestPairs:
    """Test same and different."""

    def test_same_check(self):
        """Test checking equal pairs."""
        assert same().check((1, 1)).is_ok()
        assert same().check((1, 2)).failures == ["must be same: expected 1 == 2"]

    def test_same_build(self, g):
        """Test building equal pairs."""
        for a, b in vec(same(int)).build(g):
            assert a == b

    def test_different_check(self):
        """Test checking unequal pairs."""
        assert different().check((1, 2)).is_ok()
        assert different().check((1, 1)).failures == ["must be different: expected 1 != 1"]

    def test_different_limit(self):
        """Test that every replacement draw is compared before giving up."""
        gen = Generator(bytes(8 * 3))
        with pytest.raises(BudgetExhausted) as exc_info:
            different(int, limit=3).mutate(gen, (0, 0))
        assert exc_info.value.limit == 3
        assert len(gen) == 0

    def test_different_build(self, g):
        """Test building unequal pairs."""
        pairs = vec(different(int)).satisfy(g, [(0, 0)] * 10)
        assert all(a != b for a, b in pairs)
