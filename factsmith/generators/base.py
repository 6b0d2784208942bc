"""
The dual-mode Generator used by every Fact's mutation routine.

All Facts are written in terms of a single `mutate` function which draws on
a Generator. If a mutation leaves the data unchanged, every constraint is
satisfied; if it needs to change the data, some constraint is not met. That
implication lets one function both detect non-conforming data and mold
arbitrary data into conforming data.

Every Generator primitive takes a failure reason. In check mode, each
primitive raises `CheckFailure` with that reason instead of producing a
value. In build mode no failure is raised and new data is produced. Facts
never branch on the mode themselves.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar, Union

from factsmith.core.types import CheckFailure, EntropyExhausted, UserError
from factsmith.generators.unstructured import Unstructured

T = TypeVar("T")

Reason = Union[str, Callable[[], str]]


def render(reason: Reason) -> str:
    """Render a reason which may be given lazily as a callable."""
    return reason() if callable(reason) else str(reason)


class Generator:
    """
    Source of new values in build mode, of failures in check mode.

    A Generator exclusively owns its entropy cursor for the duration of one
    evaluation call and must not be shared between concurrent evaluations.
    """

    def __init__(
        self,
        source: Unstructured | bytes | bytearray | None = None,
        *,
        check: bool = False,
    ):
        if check:
            self._u = Unstructured(b"")
        else:
            if source is None:
                raise UserError("A build-mode Generator needs an entropy source")
            u = source if isinstance(source, Unstructured) else Unstructured(source)
            if u.is_empty():
                raise UserError("A build-mode Generator needs non-empty entropy")
            self._u = u
        self._check = check

    @classmethod
    def checker(cls) -> Generator:
        """Create a check-mode Generator, which fails on every primitive."""
        return cls(check=True)

    @property
    def is_checker(self) -> bool:
        return self._check

    def __len__(self) -> int:
        """Remaining entropy in bytes."""
        return len(self._u)

    def __repr__(self) -> str:
        mode = "check" if self._check else "build"
        return f"Generator(mode={mode}, remaining={len(self)})"

    def fail(self, reason: Reason) -> None:
        """
        In check mode, fail immediately with this reason.

        Use this when a mutation assigns some known value rather than
        generating one, so that a check still reports the violation.
        """
        if self._check:
            raise CheckFailure(render(reason))

    def set(self, source: T, target: T, reason: Reason) -> T:
        """
        Fail in check mode if `source != target`; in build mode return `target`.
        """
        if source != target:
            self.fail(reason)
            return target
        return source

    def arbitrary(self, tp: Any, reason: Reason) -> Any:
        """Draw an arbitrary instance of `tp` in build mode, fail in check mode."""
        return self.with_source(reason, lambda u: u.arbitrary(tp))

    def choose(self, options: Sequence[T], reason: Reason) -> T:
        """Choose one of `options` in build mode, fail in check mode."""
        if len(options) == 0:
            raise UserError("Empty choices")
        self.fail(reason)
        if len(options) == 1:
            return options[0]
        return self.with_source(reason, lambda u: u.choose(options))

    def int_in_range(self, lo: int, hi: int, reason: Reason) -> int:
        """Draw an int from the inclusive range [lo, hi], fail in check mode."""
        if lo > hi:
            raise UserError(f"Invalid range: {lo} > {hi}")
        self.fail(reason)
        if lo == hi:
            return lo
        return self.with_source(reason, lambda u: u.int_in_range(lo, hi))

    def with_source(self, reason: Reason, f: Callable[[Unstructured], T]) -> T:
        """Call `f` on the entropy source in build mode, fail in check mode."""
        self.fail(reason)
        if self._u.is_empty():
            raise EntropyExhausted("Ran out of entropy")
        return f(self._u)
