from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

SYNONYM_TOKEN_TYPE = "SYNONYM"


@dataclass(frozen=True)
class SearchScope:
    store_id: int
    container_name: str = "quick_search_container"


@dataclass(frozen=True)
class StageParameters:
    enabled: bool
    max_rewrites: int
    weight_divider: float


@dataclass(frozen=True)
class AnalyzedToken:
    token: str
    type: str
    start_offset: int
    end_offset: int

    @property
    def position_key(self) -> str:
        return f"{self.start_offset}_{self.end_offset}"

    @classmethod
    def from_dict(cls, raw: dict) -> "AnalyzedToken":
        return cls(
            token=raw["token"],
            type=raw.get("type", ""),
            start_offset=int(raw["start_offset"]),
            end_offset=int(raw["end_offset"]),
        )


@dataclass
class AnalysisResult:
    """Outcome of one analyzer call: tokens on success, a reason on failure."""
    tokens: List[AnalyzedToken] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, tokens: List[AnalyzedToken]) -> "AnalysisResult":
        return cls(tokens=list(tokens))

    @classmethod
    def failure(cls, reason: str) -> "AnalysisResult":
        return cls(error=reason)
