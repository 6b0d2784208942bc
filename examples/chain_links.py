#!/usr/bin/env python3
"""
Chain Link Fixture Example

Builds a chain of records where every link must:
1. Be written by the same author
2. Point at the previous link through a consecutive counter
3. Use one of a set of allowed colors

The same Fact then checks the chain it built, and reports a tampered link.
"""

import enum
from dataclasses import dataclass, replace

from factsmith import (
    attr_lens,
    build_seq,
    check_seq,
    consecutive_int,
    eq,
    in_slice,
    random_generator,
)


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


def chain_fact(author: str, valid_colors: list[Color]):
    """Create the Fact that every link of the chain must satisfy."""
    return (
        attr_lens("author", eq(author, "same author"))
        & attr_lens("prev", consecutive_int("increasing prev", 0))
        & attr_lens("color", in_slice("valid color", valid_colors))
    )


def main() -> None:
    g = random_generator(seed=42)
    fact = chain_fact("alice", [Color.CYAN, Color.MAGENTA])

    chain = build_seq(g, 10, fact, ChainLink)
    for link in chain:
        print(link)

    check_seq(chain, fact).unwrap()
    print("\nchain passes its own check")

    chain[3] = replace(chain[3], author="mallory")
    for failure in check_seq(chain, fact):
        print("tampered:", failure)


if __name__ == "__main__":
    main()
