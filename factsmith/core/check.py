"""The result of checking a value against a Fact."""

from __future__ import annotations

import pprint
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from factsmith.core.types import InternalError


class CheckFailedError(AssertionError):
    """Raised by `Check.unwrap()` when there are failures."""

    pass


@dataclass(frozen=True)
class Check:
    """
    Aggregated outcome of a check.

    A Check is in exactly one of three states:

    - passed: no failures and no error
    - failed: an ordered list of failure messages
    - errored: an internal error in a Fact's own logic, which is never
      reported as an ordinary failure
    """

    failures: list[str] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def passed(cls) -> Check:
        return cls()

    @classmethod
    def failed(cls, failures: list[str]) -> Check:
        return cls(failures=list(failures))

    @classmethod
    def errored(cls, error: str) -> Check:
        return cls(error=error)

    @classmethod
    def single(cls, ok: bool, failure: str) -> Check:
        """Create a single-failure Check if `ok` is false, otherwise pass."""
        return cls.passed() if ok else cls.failed([failure])

    def is_ok(self) -> bool:
        return self.error is None and not self.failures

    def is_err(self) -> bool:
        return not self.is_ok()

    def is_internal_error(self) -> bool:
        return self.error is not None

    def result(self) -> list[str]:
        """
        Return the failure list, empty when passed.

        Raises:
            InternalError: If the Check carries an internal error
        """
        if self.error is not None:
            raise InternalError(self.error)
        return list(self.failures)

    def map(self, f: Callable[[str], str]) -> Check:
        """Map over each failure message, leaving errors untouched."""
        if self.error is not None:
            return self
        return Check.failed([f(failure) for failure in self.failures])

    def unwrap(self) -> None:
        """
        Raise if there are any failures, displaying those failures.

        Raises:
            CheckFailedError: If there is at least one failure
            InternalError: If the Check carries an internal error
        """
        failures = self.result()
        if len(failures) == 1:
            raise CheckFailedError(f"Check failed: {failures[0]}")
        if failures:
            raise CheckFailedError(f"Check failed:\n{pprint.pformat(failures)}")

    def __bool__(self) -> bool:
        return self.is_ok()

    def __iter__(self) -> Iterator[str]:
        return iter(self.failures)

    def __len__(self) -> int:
        return len(self.failures)
