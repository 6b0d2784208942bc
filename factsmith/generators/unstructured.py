"""An entropy cursor over a byte buffer: the value source behind every Generator."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TypeVar

import numpy as np

from factsmith.core.types import EntropyExhausted, UserError

if TYPE_CHECKING:
    from factsmith.arbitrary.registry import ArbitraryRegistry

T = TypeVar("T")


class Unstructured:
    """
    Read-once view over a buffer of raw entropy.

    Every draw consumes bytes from the front of the buffer. Drawing from an
    empty buffer raises `EntropyExhausted`; a draw that needs more bytes than
    remain uses what is left, zero padded.
    """

    def __init__(
        self,
        data: bytes | bytearray | memoryview | np.ndarray,
        registry: ArbitraryRegistry | None = None,
    ):
        if isinstance(data, np.ndarray):
            self._data = data.astype(np.uint8, copy=False).ravel()
        else:
            self._data = np.frombuffer(bytes(data), dtype=np.uint8)
        self._pos = 0
        self._registry = registry

    def __len__(self) -> int:
        return len(self._data) - self._pos

    def is_empty(self) -> bool:
        return len(self) == 0

    def take(self, n: int) -> bytes:
        """Consume up to `n` bytes; at least one must be available."""
        if n <= 0:
            return b""
        if self.is_empty():
            raise EntropyExhausted("Ran out of entropy")
        end = min(self._pos + n, len(self._data))
        chunk = self._data[self._pos : end].tobytes()
        self._pos = end
        return chunk

    def int_in_range(self, lo: int, hi: int) -> int:
        """Draw an integer from the inclusive range [lo, hi]."""
        if lo > hi:
            raise UserError(f"Invalid range: {lo} > {hi}")
        width = hi - lo
        if width == 0:
            return lo
        nbytes = (width.bit_length() + 7) // 8
        acc = int.from_bytes(self.take(nbytes), "big")
        return lo + acc % (width + 1)

    def choose_index(self, n: int) -> int:
        if n <= 0:
            raise UserError("Empty choices")
        return self.int_in_range(0, n - 1)

    def choose(self, options: Sequence[T]) -> T:
        return options[self.choose_index(len(options))]

    def int64(self) -> int:
        chunk = self.take(8).ljust(8, b"\0")
        return int(np.frombuffer(chunk, dtype="<i8")[0])

    def float64(self) -> float:
        chunk = self.take(8).ljust(8, b"\0")
        value = np.frombuffer(chunk, dtype="<f8")[0]
        return float(np.nan_to_num(value, nan=0.0, posinf=0.0, neginf=0.0))

    def arbitrary(self, tp: Any) -> Any:
        """Produce an arbitrary instance of the type hint `tp`."""
        if self._registry is None:
            from factsmith.arbitrary.registry import REGISTRY

            return REGISTRY.arbitrary(self, tp)
        return self._registry.arbitrary(self, tp)
