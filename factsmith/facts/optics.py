"""
Structural combinators: lift facts about parts into facts about wholes.

Projections are getter/setter pairs over values. The setter returns the
updated whole rather than writing through a reference, so checking never
needs a mutable view of the data being checked.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable
from typing import Any, TypeVar

from factsmith.core.fact import Fact, Factual
from factsmith.core.types import CheckFailure, UserError
from factsmith.generators.base import Generator

O = TypeVar("O")
T = TypeVar("T")


class LensFact(Fact[O]):
    """
    A fact about a mandatory part of a value, applied through a lens.

    Failures from the inner fact are reported as `lens(label) > ...`.
    """

    def __init__(
        self,
        label: str,
        getter: Callable[[O], T],
        setter: Callable[[O, T], O],
        inner: Fact[T],
        target: Any = None,
    ):
        super().__init__(label, target)
        self.getter = getter
        self.setter = setter
        self.inner = inner.clone()

    def mutate(self, g: Generator, value: O) -> O:
        part = self.getter(value)
        try:
            new_part = self.inner.mutate(g, part)
        except CheckFailure as e:
            raise e.prefixed(f"lens({self.label}) > ") from None
        if new_part is part:
            return value
        return self.setter(value, new_part)

    def advance(self, value: O) -> None:
        self.inner.advance(self.getter(value))

    def __repr__(self) -> str:
        return f"LensFact({self.label!r}, {self.inner!r})"


class PrismFact(Fact[O]):
    """
    A fact about an optional part of a value, applied through a prism.

    When the getter returns None the part is absent: no check or mutation
    happens and the inner fact's state does not advance.
    """

    def __init__(
        self,
        label: str,
        getter: Callable[[O], T | None],
        setter: Callable[[O, T], O],
        inner: Fact[T],
        target: Any = None,
    ):
        super().__init__(label, target)
        self.getter = getter
        self.setter = setter
        self.inner = inner.clone()

    def mutate(self, g: Generator, value: O) -> O:
        part = self.getter(value)
        if part is None:
            return value
        try:
            new_part = self.inner.mutate(g, part)
        except CheckFailure as e:
            raise e.prefixed(f"prism({self.label}) > ") from None
        if new_part is part:
            return value
        return self.setter(value, new_part)

    def advance(self, value: O) -> None:
        part = self.getter(value)
        if part is not None:
            self.inner.advance(part)

    def __repr__(self) -> str:
        return f"PrismFact({self.label!r}, {self.inner!r})"


class MappedFact(Fact[T]):
    """
    A fact chosen from the value it is applied to.

    The selector builds a brand-new fact on every application, so selected
    facts must be stateless: their state cannot carry over to the next item
    of a sequence.
    """

    def __init__(
        self,
        label: str,
        selector: Callable[[T], Factual[T]],
        target: Any = None,
    ):
        super().__init__(label, target)
        self.selector = selector

    def mutate(self, g: Generator, value: T) -> T:
        fact = self.selector(value)
        if not isinstance(fact, Factual):
            raise UserError(
                f"mapped({self.label}): selector returned {fact!r}, which is not a fact"
            )
        try:
            return fact.mutate(g, value)
        except CheckFailure as e:
            raise e.prefixed(f"mapped({self.label}) > ") from None


def lens(
    label: str,
    getter: Callable[[O], T],
    setter: Callable[[O, T], O],
    inner: Fact[T],
    target: Any = None,
) -> LensFact[O]:
    """
    Lift a fact about a part of some data into a fact about the whole.

    The setter may do more than replace the part, for instance recompute a
    digest of the data being focused on.

    Example:
        >>> fact = lens("S.x", lambda s: s.x, lambda s, x: replace(s, x=x), eq(1))
        >>> fact.check(S(x=1, y=333)).is_ok()
        True
    """
    return LensFact(label, getter, setter, inner, target)


def _set_attr(obj: O, name: str, value: Any) -> O:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.replace(obj, **{name: value})
    obj = copy.copy(obj)
    setattr(obj, name, value)
    return obj


def _set_item(obj: O, key: Any, value: Any) -> O:
    if isinstance(obj, tuple):
        items = list(obj)
        items[key] = value
        return type(obj)(items) if type(obj) is tuple else type(obj)(*items)
    obj = copy.copy(obj)
    obj[key] = value
    return obj


def attr_lens(name: str, inner: Fact[T], target: Any = None) -> LensFact[Any]:
    """Lens onto the attribute `name`; dataclasses are updated with `replace`."""
    return LensFact(
        name,
        lambda obj: getattr(obj, name),
        lambda obj, value: _set_attr(obj, name, value),
        inner,
        target,
    )


def item_lens(key: Any, inner: Fact[T], target: Any = None) -> LensFact[Any]:
    """Lens onto `obj[key]` of a tuple, list or mapping."""
    return LensFact(
        f"[{key!r}]",
        lambda obj: obj[key],
        lambda obj, value: _set_item(obj, key, value),
        inner,
        target,
    )


def prism(
    label: str,
    getter: Callable[[O], T | None],
    setter: Callable[[O, T], O],
    inner: Fact[T],
    target: Any = None,
) -> PrismFact[O]:
    """
    Lift a fact about an optional part of some data into a fact about the whole.

    A prism is like a lens, except that the part may be absent, e.g. one
    variant of a union type. Absent parts pass vacuously.
    """
    return PrismFact(label, getter, setter, inner, target)


def variant(label: str, cls: type, inner: Fact[Any], target: Any = None) -> PrismFact[Any]:
    """Prism applying `inner` only to values which are instances of `cls`."""
    return PrismFact(
        label,
        lambda value: value if isinstance(value, cls) else None,
        lambda value, part: part,
        inner,
        target,
    )


def mapped(
    label: str,
    selector: Callable[[T], Factual[T]],
    target: Any = None,
) -> MappedFact[T]:
    """
    A fact defined by the data it is applied to.

    Useful for piecewise constraints, or for setting one part of the data to
    match another part without constructing the value by hand.

    Example:
        >>> fact = mapped(
        ...     "divisibility",
        ...     lambda n: brute("divisible by 9", lambda n: n % 9 == 0)
        ...     if n > 9000
        ...     else brute("divisible by 10", lambda n: n % 10 == 0),
        ... )
        >>> fact.check(50).is_ok(), fact.check(9010).is_ok()
        (True, False)
    """
    return MappedFact(label, selector, target)
