from __future__ import annotations
"""Synonym / expansion rewrites of a fulltext query.

Rewrites are keyed by the rewritten text. When two substitution paths lead to
the same text, the path merged last wins and its substitution count is kept.
"""
from typing import Callable, Dict, List, Sequence

from .analysis import EXPANSION_ANALYZER, SYNONYM_ANALYZER
from .combinatorics import query_combinations
from .config import validate_stage
from .lookup import PositionGroups, SynonymLookup
from .models import AnalyzedToken, StageParameters
from .text import substr_replace
from .logging import logger, timed


def combine_synonyms(
    query_text: str,
    groups: Sequence[Sequence[AnalyzedToken]],
    max_rewrites: int,
    substitutions: int = 0,
    offset: int = 0,
) -> Dict[str, int]:
    """Every rewrite of `query_text` applying at most `max_rewrites` substitutions.

    Each group holds the mutually exclusive candidates of one position. A
    position is either substituted by one of its candidates or skipped.
    `offset` is the length drift introduced by substitutions already applied
    to `query_text`; candidate offsets are relative to the unmodified query.
    Returns rewritten text -> number of substitutions (never the input itself).
    """
    combinations: Dict[str, int] = {}
    if not groups or substitutions >= max_rewrites:
        return combinations

    current, remaining = groups[0], groups[1:]

    for synonym in current:
        start = synonym.start_offset + offset
        length = synonym.end_offset - synonym.start_offset
        rewritten = substr_replace(query_text, synonym.token, start, length)
        new_offset = len(rewritten) - len(query_text) + offset
        combinations[rewritten] = substitutions + 1
        if remaining:
            combinations.update(
                combine_synonyms(rewritten, remaining, max_rewrites, substitutions + 1, new_offset)
            )

    if remaining:
        combinations.update(combine_synonyms(query_text, remaining, max_rewrites, substitutions, offset))

    return combinations


def weight(base_weight: float, substitutions: int, divider: float) -> float:
    return base_weight / (substitutions * divider)


def weighted_rewrites(rewrites: Dict[str, int], divider: float, base_weight: float = 1.0) -> Dict[str, float]:
    """Convert substitution counts into query boosts."""
    return {text: weight(base_weight, count, divider) for text, count in rewrites.items()}


class QueryRewriter:
    def __init__(
        self,
        lookup: SynonymLookup,
        combination_generator: Callable[[str], List[str]] = query_combinations,
    ):
        self.lookup = lookup
        self.combination_generator = combination_generator

    def synonym_rewrites(self, index_name: str, query_text: str, analyzer: str, max_rewrites: int) -> Dict[str, int]:
        """Rewrites of `query_text` over all its word-grouping variants.

        Groups accumulate across variants (a span found in two variants shares
        one group) and are recombined after each variant, so rewrites found
        with the first variants come first.
        """
        variants = self.combination_generator(query_text)
        groups: PositionGroups = {}
        rewrites: Dict[str, int] = {}
        for variant in variants:
            for key, candidates in self.lookup.position_groups(index_name, variant, analyzer).items():
                groups.setdefault(key, []).extend(candidates)
            variant_text = variant.replace(self.lookup.delimiter, " ")
            rewrites.update(combine_synonyms(variant_text, list(groups.values()), max_rewrites))
        logger.debug(
            "rewrite.lookup variants=%d positions=%d rewrites=%d", len(variants), len(groups), len(rewrites),
            extra={"index": index_name, "analyzer": analyzer, "query": query_text[:200]},
        )
        return rewrites

    @timed("compute_query_rewrites")
    def compute_query_rewrites(
        self,
        index_name: str,
        query_text: str,
        synonym: StageParameters,
        expansion: StageParameters,
        original_boost: float = 1.0,
    ) -> Dict[str, float]:
        validate_stage("synonym", synonym)
        validate_stage("expansion", expansion)
        rewrites: Dict[str, float] = {}

        if synonym.enabled:
            counts = self.synonym_rewrites(index_name, query_text, SYNONYM_ANALYZER, synonym.max_rewrites)
            rewrites = weighted_rewrites(counts, synonym.weight_divider, original_boost)

        if expansion.enabled:
            seeds = {query_text: original_boost, **rewrites}
            for seed_text, seed_weight in seeds.items():
                counts = self.synonym_rewrites(index_name, seed_text, EXPANSION_ANALYZER, expansion.max_rewrites)
                rewrites.update(weighted_rewrites(counts, expansion.weight_divider, seed_weight))

        logger.debug("rewrite.done query=%s rewrites=%d", query_text[:200], len(rewrites))
        return rewrites
