"""
Lift a fact about an item into a fact about a whole sequence.

When checking or mutating a `vec` fact, the inner fact has `advance()` called
after each item. If a `satisfy()` attempt fails because of internally
inconsistent facts, the attempt's state is discarded, so the inner fact
starts the next attempt from where it was.
"""

from __future__ import annotations

from typing import Any, TypeVar

from factsmith.arbitrary.registry import ALPHABET
from factsmith.core.check import Check
from factsmith.core.fact import AndFact, Fact
from factsmith.core.types import CheckFailure, UserError
from factsmith.generators.base import Generator

T = TypeVar("T")


def _items(value: Any) -> list:
    if not isinstance(value, (list, tuple, str)):
        raise UserError(f"expected a list, tuple or str, got {type(value).__name__}")
    return list(value)


def _rebuild(value: Any, items: list) -> Any:
    """Rebuild a sequence of the same kind as `value` from `items`."""
    if isinstance(value, list):
        return items
    if isinstance(value, str):
        return "".join(items)
    if type(value) is tuple:
        return tuple(items)
    # namedtuple
    return type(value)(*items)


class VecFact(Fact[list]):
    """Applies one shared inner fact to every item of a sequence, in order."""

    def __init__(self, inner: Fact[T], label: str = "vec"):
        target = list[inner.target] if inner.target is not None else None
        super().__init__(label, target)
        self.inner = inner.clone()

    def mutate(self, g: Generator, value: list) -> list:
        items = []
        failures: list[str] = []
        for i, item in enumerate(_items(value)):
            try:
                item = self.inner.mutate(g, item)
            except CheckFailure as e:
                failures.extend(e.prefixed(f"item {i}: ").failures)
            self.inner.advance(item)
            items.append(item)
        if failures:
            raise CheckFailure(failures)
        return _rebuild(value, items)

    def __repr__(self) -> str:
        return f"VecFact({self.inner!r})"


class VecLenFact(Fact[list]):
    """Requires a sequence to have exactly `length` items."""

    def __init__(self, length: int, item_type: Any = None):
        if length < 0:
            raise UserError(f"length must be non-negative, got {length}")
        target = list[item_type] if item_type is not None else None
        super().__init__(f"vec_len({length})", target)
        self.length = length
        self.item_type = item_type

    def mutate(self, g: Generator, value: list) -> list:
        def reason() -> str:
            return (
                f"vec should be of length {self.length} "
                f"but is actually of length {len(value)}"
            )

        items = _items(value)
        if len(items) == self.length:
            return value
        if len(items) > self.length:
            g.fail(reason)
            items = items[: self.length]
        if len(items) < self.length:
            g.fail(reason)
            if isinstance(value, str):
                while len(items) < self.length:
                    items.append(g.choose(ALPHABET, reason))
                return _rebuild(value, items)
            tp = self.item_type
            if tp is None:
                if not items:
                    raise UserError(f"{self.label}: no item type to pad an empty sequence")
                tp = type(items[0])
            while len(items) < self.length:
                items.append(g.arbitrary(tp, reason))
        return _rebuild(value, items)


def vec(inner: Fact[T]) -> VecFact:
    """
    Lift a fact about an item into a fact about a list of items.

    Example:
        >>> vec(eq(1)).satisfy(random_generator(), [0] * 5)
        [1, 1, 1, 1, 1]
        >>> vec(consecutive_int("counter", 0)).satisfy(random_generator(), [0] * 5)
        [0, 1, 2, 3, 4]
    """
    return VecFact(inner)


def vec_len(length: int, item_type: Any = None) -> VecLenFact:
    """Checks that a list, tuple or str is of a given length, padding or truncating it."""
    return VecLenFact(length, item_type)


def vec_of_length(length: int, inner: Fact[T], item_type: Any = None) -> AndFact:
    """Combines `vec_len` with `vec` to require a list of a given length."""
    item_type = item_type if item_type is not None else inner.target
    return AndFact(vec_len(length, item_type), vec(inner), label="vec_of_length")


def check_seq(items: list, fact: Fact[T]) -> Check:
    """Check each item of `items` in order against one running copy of `fact`."""
    return vec(fact).check(items)


def build_seq(g: Generator, count: int, fact: Fact[T], item_type: Any = None) -> list:
    """
    Build `count` items, each satisfying `fact` as the next item of a sequence.

    Items are satisfied one at a time on a private clone of `fact`, so
    `fact` itself is left untouched.
    """
    item_type = item_type if item_type is not None else fact.target
    if item_type is None:
        raise UserError(f"{fact.label}: no item type to build a sequence")
    fact = fact.clone()
    items = []
    for _ in range(count):
        item = fact.satisfy(g, g.arbitrary(item_type, f"build_seq({fact.label})"))
        fact.advance(item)
        items.append(item)
    return items
