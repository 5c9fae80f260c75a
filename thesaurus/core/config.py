from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Dict, Optional
from pathlib import Path
import os
import json

from .models import SearchScope, StageParameters


class ThesaurusConfigError(ValueError):
    """Raised when stage parameters cannot produce meaningful rewrites."""


class ThesaurusConfig(BaseModel):
    # Synonyms: direct substitutions, weighted down by divider per substitution
    synonym_enabled: bool = True
    synonym_weight_divider: float = Field(default=10.0, gt=0)
    # Expansions: broader terms, chained over the synonym rewrites
    expansion_enabled: bool = False
    expansion_weight_divider: float = Field(default=10.0, gt=0)
    # Max substitutions per rewritten query (0 disables substitution)
    max_rewrites: int = Field(default=2, ge=0)
    # Index alias is "{index_prefix}_{store_code}_thesaurus"
    index_prefix: str = "magento2"
    # Remote analysis endpoint (Elasticsearch/OpenSearch _analyze API)
    analysis_url: Optional[str] = None
    analysis_timeout: float = 5.0
    # Local JSON dictionary used when no remote endpoint is configured
    dictionary_path: Optional[Path] = None
    cache_max: int = Field(default=1000, ge=0)

    @classmethod
    def from_env(cls) -> "ThesaurusConfig":
        # Allow overrides via environment
        kwargs = {}
        for field in cls.model_fields:
            env_key = f"THESAURUS_{field.upper()}"
            if env_key in os.environ:
                value = os.environ[env_key]
                if field in {"max_rewrites", "cache_max"}:
                    value = int(value)
                elif field in {"synonym_weight_divider", "expansion_weight_divider", "analysis_timeout"}:
                    value = float(value)
                elif field in {"synonym_enabled", "expansion_enabled"}:
                    value = value.lower() in {"1", "true", "yes", "on"}
                kwargs[field] = value
        return cls(**kwargs)

    def synonym_stage(self) -> StageParameters:
        return StageParameters(self.synonym_enabled, self.max_rewrites, self.synonym_weight_divider)

    def expansion_stage(self) -> StageParameters:
        return StageParameters(self.expansion_enabled, self.max_rewrites, self.expansion_weight_divider)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2, default=str)


class ThesaurusConfigFactory:
    """Builds the thesaurus config of a search scope.

    `overrides` maps a container name (e.g. "quick_search_container") to the
    fields that differ from the default config for that container.
    """
    def __init__(self, default: ThesaurusConfig | None = None, overrides: Dict[str, dict] | None = None):
        self.default = default or ThesaurusConfig.from_env()
        self.overrides = overrides or {}

    def create(self, scope: SearchScope) -> ThesaurusConfig:
        override = self.overrides.get(scope.container_name)
        if not override:
            return self.default
        return ThesaurusConfig.model_validate({**self.default.model_dump(), **override})


def validate_stage(name: str, stage: StageParameters) -> None:
    if stage.max_rewrites < 0:
        raise ThesaurusConfigError(f"{name}: max_rewrites must be >= 0 (got {stage.max_rewrites})")
    if stage.enabled and stage.weight_divider <= 0:
        raise ThesaurusConfigError(f"{name}: weight_divider must be > 0 (got {stage.weight_divider})")
