"""End-to-end tests combining several kinds of facts."""

import copy
import enum
import logging
from dataclasses import dataclass, replace

import pytest

from factsmith import (
    BudgetExhausted,
    Generator,
    and_,
    attr_lens,
    brute,
    build_seq,
    check_seq,
    consecutive_int,
    eq,
    in_range,
    in_slice,
    item_lens,
    ne,
    never,
    not_,
    or_,
    random_generator,
    same,
    vec,
    vec_of_length,
)
from factsmith.core.check import CheckFailedError


class Color(enum.Enum):
    CYAN = "cyan"
    MAGENTA = "magenta"
    YELLOW = "yellow"
    BLACK = "black"


@dataclass
class ChainLink:
    prev: int
    author: str
    color: Color


def chain_fact(author, valid_colors):
    return (
        attr_lens("author", eq(author, "same author"))
        & attr_lens("prev", consecutive_int("increasing prev", 0))
        & attr_lens("color", in_slice("valid color", valid_colors))
    )


FACTS = [
    (eq(7), int),
    (ne(7), int),
    (in_range("small", -5, 5), int),
    (not_(in_range("small", -5, 5)), int),
    (or_(eq("a"), eq("b")), str),
    (vec(in_range("byte", 0, 255)), list[int]),
    (vec_of_length(3, same(int)), list[tuple[int, int]]),
    (item_lens(0, eq(0)) & item_lens(1, in_range("pos", 1)), tuple[int, int]),
    (and_(in_range("small", 0, 100), ne(50)), int),
    (brute("even", lambda n: n % 2 == 0, target=int), int),
]


class TestChain:
    """Test building and checking a chain of records."""

    def test_build_and_check(self, g):
        """Test that a built chain passes the fact that built it."""
        fact = chain_fact("alice", [Color.CYAN, Color.MAGENTA])
        chain = build_seq(g, 10, fact, ChainLink)

        assert [link.prev for link in chain] == list(range(10))
        assert all(link.author == "alice" for link in chain)
        assert all(link.color in (Color.CYAN, Color.MAGENTA) for link in chain)
        check_seq(chain, fact).unwrap()

    def test_tampered_link(self, g):
        """Test that a tampered link is reported at its index."""
        fact = chain_fact("alice", [Color.CYAN, Color.MAGENTA])
        chain = build_seq(g, 10, fact, ChainLink)
        chain[3] = replace(chain[3], author="mallory")

        check = check_seq(chain, fact)
        assert check.failures == [
            "item 3: fact 0: lens(author) > same author: expected 'mallory' == 'alice'"
        ]
        with pytest.raises(CheckFailedError):
            check.unwrap()

    def test_build_as_vec(self, g):
        """Test building the whole chain at once."""
        fact = vec_of_length(5, chain_fact("bob", [Color.BLACK]), ChainLink)
        chain = fact.build(g)
        assert [link.prev for link in chain] == [0, 1, 2, 3, 4]
        assert {link.color for link in chain} == {Color.BLACK}


class TestProperties:
    """Test properties shared by every fact."""

    @pytest.mark.parametrize("seed", range(5))
    @pytest.mark.parametrize("fact,target", FACTS)
    def test_built_values_pass(self, seed, fact, target):
        """Test that every built value passes a check."""
        g = random_generator(seed=seed)
        value = fact.build(g, target)
        assert fact.check(value).is_ok()

    @pytest.mark.parametrize("fact,target", FACTS)
    def test_check_mode_is_noop(self, g, fact, target):
        """Test that mutating valid data in check mode returns it unchanged."""
        value = fact.build(g, target)
        before = copy.deepcopy(value)
        assert fact.clone().mutate(Generator.checker(), value) == before
        assert value == before

    @pytest.mark.parametrize("fact,target", FACTS)
    def test_check_leaves_fact_unchanged(self, g, fact, target):
        """Test that checking twice gives the same answer."""
        value = fact.build(g, target)
        assert fact.check(value).is_ok()
        assert fact.check(value).is_ok()


class TestFailureModes:
    """Test how unsatisfiable facts surface."""

    def test_never_logs_exhaustion(self, g, caplog):
        """Test that an exhausted satisfy is logged."""
        with caplog.at_level(logging.DEBUG, logger="factsmith"):
            with pytest.raises(BudgetExhausted):
                never("nope").build(g, int)
        assert "could not satisfy nope after 7 attempts" in caplog.text
        assert "satisfy attempt 1/7 failed" in caplog.text

    def test_contradiction(self, g):
        """Test that contradictory facts cannot be satisfied."""
        with pytest.raises(BudgetExhausted):
            and_(eq(1), eq(2)).build(g)

    def test_unsatisfiable_negation_checks_as_failure(self):
        """Test that checking never reaches the brute-force budget."""
        check = not_(in_range("anything", None, None), limit=3).check(0)
        assert check.is_err()
        assert not check.is_internal_error()
