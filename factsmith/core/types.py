"""Core error taxonomy and configuration with runtime validation."""

from __future__ import annotations

from dataclasses import dataclass


class FactError(Exception):
    """Base class for every error raised while evaluating a Fact."""

    pass


class CheckFailure(FactError):
    """
    Raised in check mode when data violates a constraint.

    This is the only expected error kind. It carries an ordered list of
    failure messages, one per violated constraint.
    """

    def __init__(self, failures: str | list[str]):
        if isinstance(failures, str):
            failures = [failures]
        self.failures: list[str] = list(failures)
        super().__init__("; ".join(self.failures))

    def prefixed(self, prefix: str) -> CheckFailure:
        """Return a copy with `prefix` prepended to every message."""
        return CheckFailure([f"{prefix}{f}" for f in self.failures])


class EntropyExhausted(FactError):
    """Raised when the value source has no entropy left."""

    pass


class InternalError(FactError):
    """Raised when a Fact's own logic is inconsistent."""

    pass


class UserError(FactError, ValueError):
    """Raised when a Fact or Generator is used incorrectly."""

    pass


class ConfigError(UserError):
    """Raised when a FactConfig is invalid."""

    pass


class BudgetExhausted(InternalError):
    """Raised when a retry or brute-force loop runs out of iterations."""

    def __init__(self, what: str, limit: int, last_failures: list[str]):
        self.what = what
        self.limit = limit
        self.last_failures = list(last_failures)
        super().__init__(
            f"{what}: exceeded limit of {limit} iterations. "
            f"Last failure: {self.last_failures!r}"
        )


@dataclass(frozen=True)
class FactConfig:
    """Retry budgets for satisfy and brute-force search."""

    satisfy_attempts: int = 7
    brute_iterations: int = 100

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.satisfy_attempts <= 0:
            raise ConfigError(
                f"satisfy_attempts must be positive, got {self.satisfy_attempts}"
            )

        if self.brute_iterations <= 0:
            raise ConfigError(
                f"brute_iterations must be positive, got {self.brute_iterations}"
            )


DEFAULT_CONFIG = FactConfig()
