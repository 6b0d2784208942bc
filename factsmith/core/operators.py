"""Constructors for logical and functional fact composition."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from factsmith.core.fact import AndFact, BruteFact, Fact, LambdaFact, NotFact, OrFact
from factsmith.generators.base import Generator

T = TypeVar("T")
S = TypeVar("S")


def and_(a: Fact[T], b: Fact[T], *more: Fact[T]) -> AndFact[T]:
    """Apply `a`, then `b` (then any further facts) to the same value."""
    return AndFact(a, b, *more)


def or_(a: Fact[T], b: Fact[T], label: str = "or") -> OrFact[T]:
    """Combine two facts so that either one may be satisfied."""
    return OrFact(a, b, label=label)


def not_(fact: Fact[T], label: str | None = None, limit: int | None = None) -> NotFact[T]:
    """
    Negate a fact.

    Mutation resamples arbitrary values until `fact` no longer passes, so the
    negated set must be reasonably likely under random data.
    """
    return NotFact(fact, label=label, limit=limit)


def brute(
    label: str,
    predicate: Callable[[T], bool],
    target: Any = None,
    limit: int | None = None,
) -> BruteFact[T]:
    """
    A constraint defined only by a predicate, met by random resampling.

    It is best placed first in a conjunction: a weak predicate may replace
    the value wholesale, undoing what earlier facts arranged.

    Example:
        >>> div_by_3 = brute("divisible by 3", lambda n: n % 3 == 0, target=int)
        >>> div_by_3.check(9).is_ok()
        True
    """
    return BruteFact(
        label,
        lambda value: None if predicate(value) else label,
        target=target,
        limit=limit,
    )


def brute_labeled(
    label: str,
    reason: Callable[[T], str | None],
    target: Any = None,
    limit: int | None = None,
) -> BruteFact[T]:
    """A version of `brute` whose function returns the failure reason, or None."""
    return BruteFact(label, reason, target=target, limit=limit)


def lambda_fact(
    label: str,
    state: S,
    fn: Callable[[Generator, S, T], tuple[T, S]],
    advance: Callable[[S, T], S] | None = None,
    target: Any = None,
) -> LambdaFact[S, T]:
    """
    Create a stateful fact from a bare function.

    Example:
        >>> def geometric(g, s, v):
        ...     v = g.set(v, s, "value is not geometrically increasing by 2")
        ...     return v, s * 2
        >>> fact = vec_of_length(4, lambda_fact("geometric", 2, geometric, target=int))
        >>> fact.build(random_generator(), list[int])
        [2, 4, 8, 16]
    """
    return LambdaFact(label, state, fn, on_advance=advance, target=target)


def stateless(
    label: str,
    fn: Callable[[Generator, T], T],
    target: Any = None,
) -> LambdaFact[None, T]:
    """Create a fact without state from a function `fn(g, value) -> value`."""
    return LambdaFact(label, None, lambda g, state, value: (fn(g, value), state), target=target)


def all_of(*facts: Fact[T]) -> Fact[T]:
    """
    Create a fact requiring ALL of the given facts.

    Equivalent to fact1 & fact2 & ... & factN
    """
    if not facts:
        raise ValueError("At least one fact must be provided")

    if len(facts) == 1:
        return facts[0]

    return AndFact(*facts)


def any_of(*facts: Fact[T]) -> Fact[T]:
    """
    Create a fact requiring ANY of the given facts.

    Equivalent to fact1 | fact2 | ... | factN
    """
    if not facts:
        raise ValueError("At least one fact must be provided")

    if len(facts) == 1:
        return facts[0]

    return OrFact(*facts)


def none_of(*facts: Fact[T]) -> Fact[T]:
    """
    Create a fact requiring NONE of the given facts.

    Equivalent to ~(fact1 | fact2 | ... | factN)
    """
    if not facts:
        raise ValueError("At least one fact must be provided")

    return NotFact(any_of(*facts))
