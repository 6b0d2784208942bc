"""Core fact logic and types."""

from factsmith.core.check import Check
from factsmith.core.fact import Fact, Factual
from factsmith.core.types import FactConfig

__all__ = ["Check", "Fact", "Factual", "FactConfig"]
