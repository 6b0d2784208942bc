"""
Factsmith: composable constraints which both check and build data.

A Fact is a declarative constraint over a value. The same Fact can check
whether existing data conforms, or mold arbitrary data into data which is
guaranteed to conform. This makes Facts useful for writing test fixtures
and property-based tests.
"""

__version__ = "0.1.0"

# Core exports
from factsmith.core.check import Check
from factsmith.core.fact import Fact, Factual
from factsmith.core.operators import (
    all_of,
    and_,
    any_of,
    brute,
    brute_labeled,
    lambda_fact,
    none_of,
    not_,
    or_,
    stateless,
)
from factsmith.core.types import (
    BudgetExhausted,
    CheckFailure,
    EntropyExhausted,
    FactConfig,
    FactError,
    InternalError,
    UserError,
)
from factsmith.facts import (
    always,
    attr_lens,
    build_seq,
    check_seq,
    consecutive_int,
    different,
    eq,
    in_range,
    in_slice,
    item_lens,
    lens,
    mapped,
    ne,
    never,
    prism,
    same,
    variant,
    vec,
    vec_len,
    vec_of_length,
)
from factsmith.generators import Generator, Unstructured, random_generator

__all__ = [
    "BudgetExhausted",
    "Check",
    "CheckFailure",
    "EntropyExhausted",
    "Fact",
    "FactConfig",
    "FactError",
    "Factual",
    "Generator",
    "InternalError",
    "Unstructured",
    "UserError",
    "all_of",
    "always",
    "and_",
    "any_of",
    "attr_lens",
    "brute",
    "brute_labeled",
    "build_seq",
    "check_seq",
    "consecutive_int",
    "different",
    "eq",
    "in_range",
    "in_slice",
    "item_lens",
    "lambda_fact",
    "lens",
    "mapped",
    "ne",
    "never",
    "none_of",
    "not_",
    "or_",
    "prism",
    "random_generator",
    "same",
    "stateless",
    "variant",
    "vec",
    "vec_len",
    "vec_of_length",
]
