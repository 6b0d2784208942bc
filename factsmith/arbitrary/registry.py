"""Registry mapping type hints to strategies that build arbitrary values."""

from __future__ import annotations

import dataclasses
import enum
import string
import types
import typing
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from factsmith.core.types import UserError

if TYPE_CHECKING:
    from factsmith.generators.unstructured import Unstructured

Strategy = Callable[["Unstructured", Any, "ArbitraryRegistry"], Any]

MAX_COLLECTION_SIZE = 10
ALPHABET = string.ascii_letters + string.digits + string.punctuation + " "


class ArbitraryRegistry:
    """
    Registry of strategies producing arbitrary values from entropy.

    A strategy is called as `strategy(u, tp, registry)` where `tp` is the full
    type hint being built, so that generic strategies (lists, tuples, unions)
    can recurse into their parameters through the registry.

    Lookup order for a type hint:

    - an exact registration for the hint
    - a registration for its generic origin (`list[int]` -> `list`)
    - Enum subclasses, dataclasses, and classes defining `__arbitrary__`
    """

    def __init__(self) -> None:
        self._strategies: dict[Any, Strategy] = {}

    def register(self, tp: Any, strategy: Strategy, override: bool = False) -> None:
        """
        Register a strategy for a type.

        Args:
            tp: Type or generic origin to register
            strategy: Callable building a value of `tp`
            override: Whether to override an existing registration

        Raises:
            ValueError: If `tp` is already registered and override=False
        """
        if tp in self._strategies and not override:
            raise ValueError(
                f"Strategy for {tp!r} already registered. Use override=True to replace."
            )
        if not callable(strategy):
            raise TypeError("strategy must be callable")
        self._strategies[tp] = strategy

    def unregister(self, tp: Any) -> bool:
        """Remove a registration; return whether one was found."""
        return self._strategies.pop(tp, None) is not None

    def is_registered(self, tp: Any) -> bool:
        return tp in self._strategies

    def copy(self) -> ArbitraryRegistry:
        """Return an independent registry with the same registrations."""
        registry = ArbitraryRegistry()
        registry._strategies = dict(self._strategies)
        return registry

    def resolve(self, tp: Any) -> Strategy:
        """
        Find the strategy for a type hint.

        Raises:
            UserError: If no strategy can build `tp`
        """
        if tp in self._strategies:
            return self._strategies[tp]

        origin = typing.get_origin(tp)
        if origin is not None and origin in self._strategies:
            return self._strategies[origin]

        if isinstance(tp, type):
            if issubclass(tp, enum.Enum):
                return _enum
            if dataclasses.is_dataclass(tp):
                return _dataclass
            if hasattr(tp, "__arbitrary__"):
                return _custom

        raise UserError(f"Don't know how to build an arbitrary {tp!r}")

    def arbitrary(self, u: Unstructured, tp: Any) -> Any:
        """Build an arbitrary value of type `tp` from `u`."""
        return self.resolve(tp)(u, tp, self)


def _size(u: Unstructured) -> int:
    return u.int_in_range(0, MAX_COLLECTION_SIZE)


def _args(tp: Any) -> tuple[Any, ...]:
    args = typing.get_args(tp)
    if not args:
        raise UserError(f"Cannot build a bare {tp!r} without its item types")
    return args


def _none(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> None:
    return None


def _bool(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> bool:
    return bool(u.take(1)[0] & 1)


def _int(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> int:
    return u.int64()


def _float(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> float:
    return u.float64()


def _str(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> str:
    return "".join(u.choose(ALPHABET) for _ in range(_size(u)))


def _bytes(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> bytes:
    return bytes(u.int_in_range(0, 255) for _ in range(_size(u)))


def _list(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> list:
    (item,) = _args(tp)
    return [registry.arbitrary(u, item) for _ in range(_size(u))]


def _set(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> Any:
    (item,) = _args(tp)
    items = {registry.arbitrary(u, item) for _ in range(_size(u))}
    return frozenset(items) if typing.get_origin(tp) is frozenset else items


def _tuple(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> tuple:
    if tp is tuple:
        raise UserError("Cannot build a bare tuple without its item types")
    args = typing.get_args(tp)
    if args == ((),) or args == ():
        return ()
    if len(args) == 2 and args[1] is Ellipsis:
        return tuple(registry.arbitrary(u, args[0]) for _ in range(_size(u)))
    return tuple(registry.arbitrary(u, arg) for arg in args)


def _dict(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> dict:
    key, value = _args(tp)
    return {
        registry.arbitrary(u, key): registry.arbitrary(u, value)
        for _ in range(_size(u))
    }


def _union(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> Any:
    return registry.arbitrary(u, u.choose(typing.get_args(tp)))


def _literal(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> Any:
    return u.choose(typing.get_args(tp))


def _enum(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> Any:
    return u.choose(list(tp))


def _dataclass(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> Any:
    hints = typing.get_type_hints(tp)
    kwargs = {
        f.name: registry.arbitrary(u, hints[f.name])
        for f in dataclasses.fields(tp)
        if f.init
    }
    return tp(**kwargs)


def _custom(u: Unstructured, tp: Any, registry: ArbitraryRegistry) -> Any:
    return tp.__arbitrary__(u)


def default_registry() -> ArbitraryRegistry:
    """Create a registry populated with strategies for builtin types."""
    registry = ArbitraryRegistry()
    for tp, strategy in [
        (type(None), _none),
        (None, _none),
        (bool, _bool),
        (int, _int),
        (float, _float),
        (str, _str),
        (bytes, _bytes),
        (list, _list),
        (set, _set),
        (frozenset, _set),
        (tuple, _tuple),
        (dict, _dict),
        (typing.Union, _union),
        (types.UnionType, _union),
        (typing.Literal, _literal),
    ]:
        registry.register(tp, strategy)
    return registry


REGISTRY = default_registry()
