"""Arbitrary value construction from raw entropy."""

from factsmith.arbitrary.registry import REGISTRY, ArbitraryRegistry, default_registry

__all__ = ["ArbitraryRegistry", "REGISTRY", "default_registry"]
