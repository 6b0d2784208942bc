"""Generators and the entropy source they draw from."""

from factsmith.generators.base import Generator
from factsmith.generators.noise import random_generator
from factsmith.generators.unstructured import Unstructured

__all__ = ["Generator", "Unstructured", "random_generator"]
