"""Core Fact protocol, base class, and composite implementations."""

from __future__ import annotations

import abc
import copy
import logging
from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from factsmith.core.check import Check
from factsmith.core.types import (
    DEFAULT_CONFIG,
    BudgetExhausted,
    CheckFailure,
    EntropyExhausted,
    FactConfig,
    InternalError,
    UserError,
)
from factsmith.generators.base import Generator

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


@runtime_checkable
class Factual(Protocol[T]):
    """Anything with a dual-mode mutation routine can act as a Fact."""

    def mutate(self, g: Generator, value: T) -> T:
        """
        Move `value` closer to satisfying the constraint.

        Args:
            g: Generator supplying new data (build mode) or failures (check mode)
            value: Value to mutate

        Returns:
            The mutated value, which is `value` itself when already satisfied
        """
        ...

    def advance(self, value: T) -> None:
        """Update internal state after `value` was processed as a sequence item."""
        ...


class Fact(abc.ABC, Generic[T]):
    """
    A declarative constraint which is both a validator and a generator.

    Subclasses implement only `mutate`. `check`, `satisfy` and `build` are
    derived from it: `check` runs `mutate` with a check-mode Generator, so any
    attempt to change the data becomes a reported failure.
    """

    config: FactConfig = DEFAULT_CONFIG

    def __init__(self, label: str, target: Any = None):
        self.label = label
        self.target = target

    @abc.abstractmethod
    def mutate(self, g: Generator, value: T) -> T:
        """Mutate `value` so that it satisfies this constraint."""
        pass

    def advance(self, value: T) -> None:
        pass

    def clone(self) -> Fact[T]:
        return copy.deepcopy(self)

    def labeled(self, label: str) -> Fact[T]:
        fact = self.clone()
        fact.label = label
        return fact

    def with_config(self, config: FactConfig) -> Fact[T]:
        fact = self.clone()
        fact.config = config
        return fact

    def check(self, value: T) -> Check:
        """
        Check whether `value` satisfies this constraint.

        Evaluated on a clone of this Fact and a copy of `value`, so neither
        the Fact's state nor the value is ever modified.
        """
        g = Generator.checker()
        copied = copy.deepcopy(value)
        try:
            result = self.clone().mutate(g, copied)
        except CheckFailure as e:
            return Check.failed(e.failures)
        except (InternalError, UserError, EntropyExhausted) as e:
            return Check.errored(f"{type(e).__name__}: {e}")
        if result is not copied and result != copied:
            return Check.errored(
                f"{self.label}: mutate changed {value!r} to {result!r} "
                "during a check without reporting a failure"
            )
        return Check.passed()

    def satisfy(self, g: Generator, value: T, *, attempts: int | None = None) -> T:
        """
        Mutate `value` until it satisfies this constraint.

        Each attempt mutates a clone of this Fact, then checks the result
        against the state the attempt started from. Only a passing attempt
        commits its state back into this Fact.

        Raises:
            BudgetExhausted: If no attempt produced a passing value
        """
        attempts = attempts if attempts is not None else self.config.satisfy_attempts
        last_failures: list[str] = []
        candidate = value
        for attempt in range(attempts):
            trial = self.clone()
            try:
                candidate = trial.mutate(g, candidate)
            except CheckFailure as e:
                last_failures = e.failures
                continue
            failures = self.check(candidate).result()
            if not failures:
                self.__dict__.update(trial.__dict__)
                return candidate
            last_failures = failures
            logger.debug(
                "satisfy attempt %d/%d failed for %s: %s",
                attempt + 1,
                attempts,
                self.label,
                failures,
            )

        logger.error("could not satisfy %s after %d attempts", self.label, attempts)
        raise BudgetExhausted(f"satisfy({self.label})", attempts, last_failures)

    def build(self, g: Generator, target: Any = None) -> T:
        """
        Build a new value which satisfies this constraint.

        Args:
            g: Build-mode Generator
            target: Type hint of the value to build; defaults to `self.target`

        Returns:
            A value of type `target` satisfying this constraint
        """
        target = target if target is not None else self.target
        if target is None:
            raise UserError(f"{self.label}: no target type to build")
        seed = g.arbitrary(target, f"build({self.label})")
        return self.clone().satisfy(g, seed)

    def __and__(self, other: Fact[T]) -> AndFact[T]:
        return AndFact(self, other)

    def __or__(self, other: Fact[T]) -> OrFact[T]:
        return OrFact(self, other)

    def __invert__(self) -> NotFact[T]:
        return NotFact(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.label!r})"


class AndFact(Fact[T]):
    """Conjunction: applies each fact in order to the same value."""

    def __init__(self, *facts: Fact[T], label: str = "and"):
        if not facts:
            raise UserError("At least one fact must be provided")
        target = next((f.target for f in facts if f.target is not None), None)
        super().__init__(label, target)
        self.facts = [f.clone() for f in facts]

    def mutate(self, g: Generator, value: T) -> T:
        failures: list[str] = []
        for i, fact in enumerate(self.facts):
            try:
                value = fact.mutate(g, value)
            except CheckFailure as e:
                failures.extend(e.prefixed(f"fact {i}: ").failures)
        if failures:
            raise CheckFailure(failures)
        return value

    def advance(self, value: T) -> None:
        for fact in self.facts:
            fact.advance(value)

    def __and__(self, other: Fact[T]) -> AndFact[T]:
        return AndFact(*self.facts, other, label=self.label)

    def __repr__(self) -> str:
        return f"AndFact({', '.join(repr(f) for f in self.facts)})"


class OrFact(Fact[T]):
    """
    Disjunction: satisfied when any of the facts is.

    When none is satisfied, mutation is delegated to one of the facts chosen
    at random, so repeated `satisfy` attempts eventually meet one of them.
    """

    def __init__(self, *facts: Fact[T], label: str = "or"):
        if len(facts) < 2:
            raise UserError("At least two facts must be provided")
        target = next((f.target for f in facts if f.target is not None), None)
        super().__init__(label, target)
        self.facts = [f.clone() for f in facts]

    def mutate(self, g: Generator, value: T) -> T:
        checks = [fact.check(value) for fact in self.facts]
        if any(c.is_ok() for c in checks):
            return value
        failures = [c.result() for c in checks]
        g.fail(
            lambda: f"{self.label}: expected any of the following conditions to be met: "
            + " OR ".join(f"[{'; '.join(fs)}]" for fs in failures)
        )
        i = g.int_in_range(0, len(self.facts) - 1, self.label)
        return self.facts[i].mutate(g, value)

    def advance(self, value: T) -> None:
        for fact in self.facts:
            fact.advance(value)

    def __or__(self, other: Fact[T]) -> OrFact[T]:
        return OrFact(*self.facts, other, label=self.label)

    def __repr__(self) -> str:
        return f"OrFact({', '.join(repr(f) for f in self.facts)})"


class BruteFact(Fact[T]):
    """
    A constraint defined only by a predicate, met by brute-force resampling.

    Mutation draws arbitrary replacement values until the predicate holds.
    This only works well when a random value is reasonably likely to pass.
    Exceeding the iteration limit raises `BudgetExhausted`.
    """

    def __init__(
        self,
        label: str,
        reason: Callable[[T], str | None] | None = None,
        target: Any = None,
        limit: int | None = None,
    ):
        if limit is not None and limit <= 0:
            raise UserError(f"{label}: limit must be positive, got {limit}")
        super().__init__(label, target)
        self.reason = reason
        self.limit = limit

    def _reason(self, value: T) -> str | None:
        """Return None if `value` passes, else the failure reason."""
        return self.reason(value)

    def mutate(self, g: Generator, value: T) -> T:
        limit = self.limit if self.limit is not None else self.config.brute_iterations
        tp = self.target if self.target is not None else type(value)
        for _ in range(limit):
            reason = self._reason(value)
            if reason is None:
                return value
            value = g.arbitrary(tp, reason)

        reason = self._reason(value)
        if reason is None:
            return value
        logger.error("brute-force limit of %d reached for %s", limit, self.label)
        raise BudgetExhausted(f"brute({self.label})", limit, [reason])


class NotFact(BruteFact[T]):
    """Negation: resamples until the wrapped fact's check fails."""

    def __init__(self, fact: Fact[T], label: str | None = None, limit: int | None = None):
        super().__init__(label or f"not({fact.label})", target=fact.target, limit=limit)
        self.fact = fact.clone()

    def _reason(self, value: T) -> str | None:
        check = self.fact.check(value)
        if check.is_internal_error():
            raise InternalError(check.error)
        if check.is_ok():
            return f"{self.label}: expected {value!r} to fail {self.fact.label}"
        return None

    def advance(self, value: T) -> None:
        self.fact.advance(value)


class LambdaFact(Fact[T], Generic[S, T]):
    """
    A fact defined by a bare function over (generator, state, value).

    `fn(g, state, value)` returns the new `(value, state)` pair. State updated
    by `fn` carries over to the next item when lifted over a sequence. An
    optional `on_advance(state, value)` returns the state for the next item.
    """

    def __init__(
        self,
        label: str,
        state: S,
        fn: Callable[[Generator, S, T], tuple[T, S]],
        on_advance: Callable[[S, T], S] | None = None,
        target: Any = None,
    ):
        super().__init__(label, target)
        self.state = state
        self.fn = fn
        self.on_advance = on_advance

    def mutate(self, g: Generator, value: T) -> T:
        value, self.state = self.fn(g, self.state, value)
        return value

    def advance(self, value: T) -> None:
        if self.on_advance is not None:
            self.state = self.on_advance(self.state, value)

    def __repr__(self) -> str:
        return f"LambdaFact({self.label!r}, state={self.state!r})"
