"""Leaf predicates, structural combinators and sequence facts."""

from factsmith.facts.optics import attr_lens, item_lens, lens, mapped, prism, variant
from factsmith.facts.predicates import (
    always,
    consecutive_int,
    different,
    eq,
    in_range,
    in_slice,
    ne,
    never,
    same,
)
from factsmith.facts.seq import build_seq, check_seq, vec, vec_len, vec_of_length

__all__ = [
    "always",
    "attr_lens",
    "build_seq",
    "check_seq",
    "consecutive_int",
    "different",
    "eq",
    "in_range",
    "in_slice",
    "item_lens",
    "lens",
    "mapped",
    "ne",
    "never",
    "prism",
    "same",
    "variant",
    "vec",
    "vec_len",
    "vec_of_length",
]
