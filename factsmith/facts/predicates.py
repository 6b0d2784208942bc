"""Leaf predicates: equality, ranges, membership, counters and pairs."""

from __future__ import annotations

import copy
import enum
from collections.abc import Sequence
from typing import Any, TypeVar

from factsmith.core.fact import Fact, NotFact
from factsmith.core.types import BudgetExhausted, UserError
from factsmith.generators.base import Generator

T = TypeVar("T")

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1


class EqOp(enum.Enum):
    EQUAL = "same"
    NOT_EQUAL = "different"


class ConstantFact(Fact[Any]):
    """A constraint which is either always or never met."""

    def __init__(self, ok: bool, label: str):
        super().__init__(label)
        self.ok = ok

    def mutate(self, g: Generator, value: Any) -> Any:
        if not self.ok:
            g.fail(f"never: {self.label}")
        return value


class EqFact(Fact[T]):
    """Equality with a constant; a miss is fixed by assigning the constant."""

    def __init__(self, constant: T, label: str | None = None):
        super().__init__(label or f"eq({constant!r})", type(constant))
        self.constant = constant

    def mutate(self, g: Generator, value: T) -> T:
        if value != self.constant:
            g.fail(lambda: f"{self.label}: expected {value!r} == {self.constant!r}")
            value = copy.deepcopy(self.constant)
        return value


class InRangeFact(Fact[int]):
    """
    Membership in an inclusive integer range.

    A miss is fixed by drawing an arbitrary int and remapping it into the
    range by Euclidean remainder. An open end defaults to the 64-bit bound.
    """

    def __init__(self, label: str, lo: int | None, hi: int | None):
        if lo is not None and hi is not None and lo > hi:
            raise UserError(f"{label}: invalid range [{lo}, {hi}]")
        super().__init__(label, int)
        self.lo = lo
        self.hi = hi

    def contains(self, value: int) -> bool:
        if self.lo is not None and value < self.lo:
            return False
        if self.hi is not None and value > self.hi:
            return False
        return True

    def mutate(self, g: Generator, value: int) -> int:
        if not self.contains(value):
            rand = g.arbitrary(
                int,
                lambda: f"{self.label}: expected {value!r} to be within "
                f"[{self.lo if self.lo is not None else '..'}, "
                f"{self.hi if self.hi is not None else '..'}]",
            )
            lo = self.lo if self.lo is not None else INT_MIN
            hi = self.hi if self.hi is not None else INT_MAX
            value = lo + rand % (hi - lo + 1)
        return value

    def __repr__(self) -> str:
        return f"InRangeFact({self.label!r}, lo={self.lo}, hi={self.hi})"


class InSliceFact(Fact[T]):
    """Membership in a fixed list of options; a miss picks one at random."""

    def __init__(self, label: str, options: Sequence[T]):
        target = type(options[0]) if len(options) > 0 else None
        super().__init__(label, target)
        self.options = list(options)

    def mutate(self, g: Generator, value: T) -> T:
        if value not in self.options:
            value = copy.deepcopy(
                g.choose(
                    self.options,
                    lambda: f"{self.label}: expected {value!r} to be one of {self.options!r}",
                )
            )
        return value


class ConsecutiveIntFact(Fact[int]):
    """
    A counter: each value must be one more than the previous one.

    The counter advances only when a value is produced. A failing check
    leaves it in place, so a sequence that starts at the wrong number fails
    once, at its first item.
    """

    def __init__(self, label: str, initial: int):
        super().__init__(label, type(initial))
        self.counter = initial

    def mutate(self, g: Generator, value: int) -> int:
        expected = self.counter
        if value != expected:
            g.fail(lambda: f"{self.label}: expected {expected}, got {value!r}")
            value = expected
        self.counter = expected + 1
        return value

    def __repr__(self) -> str:
        return f"ConsecutiveIntFact({self.label!r}, counter={self.counter})"


class SameFact(Fact[tuple]):
    """Equality or inequality between the two items of a pair."""

    def __init__(self, op: EqOp, item_type: Any = None, limit: int | None = None):
        target = tuple[item_type, item_type] if item_type is not None else None
        super().__init__(op.value, target)
        self.op = op
        self.item_type = item_type
        self.limit = limit

    def mutate(self, g: Generator, value: tuple) -> tuple:
        a, b = value
        if self.op is EqOp.EQUAL:
            if a != b:
                g.fail(lambda: f"must be same: expected {a!r} == {b!r}")
                a = copy.deepcopy(b)
            return (a, b)

        limit = self.limit if self.limit is not None else self.config.brute_iterations
        tp = self.item_type if self.item_type is not None else type(a)
        for _ in range(limit):
            if a != b:
                return (a, b)
            a = g.arbitrary(tp, lambda: f"must be different: expected {a!r} != {b!r}")
        if a != b:
            return (a, b)
        raise BudgetExhausted("different", limit, [f"{a!r} == {b!r}"])


def always() -> ConstantFact:
    """A constraint which is always met."""
    return ConstantFact(True, "always")


def never(label: str) -> ConstantFact:
    """A constraint which is never met; building with it always fails."""
    return ConstantFact(False, label)


def eq(constant: T, label: str | None = None) -> EqFact[T]:
    """Specifies an equality constraint."""
    return EqFact(constant, label)


def ne(constant: T, label: str | None = None) -> NotFact[T]:
    """Specifies an inequality constraint."""
    return NotFact(EqFact(constant), label=label or f"ne({constant!r})")


def in_range(label: str, lo: int | range | None = None, hi: int | None = None) -> InRangeFact:
    """
    Specifies an inclusive range constraint on ints.

    Either end may be None for an open range, or `lo` may be a step-1
    `range` object.

    Example:
        >>> in_range("must be positive", 1).check(0).is_ok()
        False
        >>> in_range("digit", range(10)).check(9).is_ok()
        True
    """
    if isinstance(lo, range):
        if hi is not None or lo.step != 1 or len(lo) == 0:
            raise UserError(f"{label}: expected a non-empty range with step 1, got {lo!r}")
        lo, hi = lo.start, lo.stop - 1
    return InRangeFact(label, lo, hi)


def in_slice(label: str, options: Sequence[T]) -> InSliceFact[T]:
    """Specifies a membership constraint."""
    return InSliceFact(label, options)


def consecutive_int(label: str, initial: int) -> ConsecutiveIntFact:
    """Specifies that a value should increase by 1 at every check or mutation."""
    return ConsecutiveIntFact(label, initial)


def same(item_type: Any = None) -> SameFact:
    """Specifies an equality constraint between the two items of a pair."""
    return SameFact(EqOp.EQUAL, item_type)


def different(item_type: Any = None, limit: int | None = None) -> SameFact:
    """Specifies an inequality constraint between the two items of a pair."""
    return SameFact(EqOp.NOT_EQUAL, item_type, limit)
