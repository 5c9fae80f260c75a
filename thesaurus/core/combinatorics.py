from __future__ import annotations
"""Word-grouping variants of a query.

"long sleeve dress" => "long_sleeve dress", "long sleeve_dress", "long_sleeve_dress".
Multi-word synonyms are indexed with "_" as separator, so merging adjacent
words lets the analyzer match word groups inside the complete query.
"""
from itertools import combinations as _combinations
from typing import Callable, List, Sequence, Tuple, TypeVar

WORD_DELIMITER = "_"

T = TypeVar("T")


def combinations(items: Sequence[T], size: int) -> List[Tuple[T, ...]]:
    """All order-preserving `size`-combinations of `items`, without repetition."""
    return list(_combinations(items, size))


def query_combinations(
    query_text: str,
    delimiter: str = WORD_DELIMITER,
    combine: Callable[[Sequence[int], int], List[Tuple[int, ...]]] = combinations,
) -> List[str]:
    """Return the query and every variant with some spaces replaced by `delimiter`.

    Original query first, duplicates removed. Produces 2^k - 1 variants for
    k spaces: callers should keep queries short.
    """
    spaces = [pos for pos, char in enumerate(query_text) if char == " "]

    space_combinations = []
    for cpt in range(1, len(spaces) + 1):
        space_combinations.extend(combine(spaces, cpt))

    queries = [query_text]
    for combination in space_combinations:
        chars = list(query_text)
        for offset in combination:
            chars[offset] = delimiter
        queries.append("".join(chars))

    return list(dict.fromkeys(queries))
