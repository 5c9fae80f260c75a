from __future__ import annotations
from typing import Dict, List

from .analysis import AnalysisBackend
from .combinatorics import WORD_DELIMITER
from .models import AnalysisResult, AnalyzedToken, SYNONYM_TOKEN_TYPE
from .logging import logger

PositionGroups = Dict[str, List[AnalyzedToken]]


class SynonymLookup:
    """Fetches synonym candidates of a query variant, grouped by position."""
    def __init__(self, backend: AnalysisBackend, delimiter: str = WORD_DELIMITER):
        self.backend = backend
        self.delimiter = delimiter

    def analyze(self, index_name: str, text: str, analyzer: str) -> AnalysisResult:
        try:
            return AnalysisResult.success(self.backend.analyze(index_name, text, analyzer))
        except Exception as exc:
            return AnalysisResult.failure(f"{type(exc).__name__}: {exc}")

    def position_groups(self, index_name: str, variant: str, analyzer: str) -> PositionGroups:
        result = self.analyze(index_name, variant, analyzer)
        if result.ok:
            tokens = result.tokens
        else:
            logger.warning(
                "lookup.failed reason=%s", result.error,
                extra={"index": index_name, "analyzer": analyzer, "query": variant[:200]},
            )
            tokens = []
        groups: PositionGroups = {}
        for token in tokens:
            if token.type != SYNONYM_TOKEN_TYPE:
                continue
            candidate = AnalyzedToken(
                token.token.replace(self.delimiter, " "),
                token.type,
                token.start_offset,
                token.end_offset,
            )
            groups.setdefault(candidate.position_key, []).append(candidate)
        return groups
