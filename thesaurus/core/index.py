from __future__ import annotations
from typing import Dict, List

from .analysis import DictionaryAnalysisBackend, HttpAnalysisBackend
from .cache import InMemoryRewriteCache, RewriteCache
from .config import ThesaurusConfig, ThesaurusConfigError, ThesaurusConfigFactory
from .lookup import SynonymLookup
from .models import SearchScope
from .rewriter import QueryRewriter
from .scope import IndexAliasResolver
from .logging import logger


class ThesaurusIndex:
    """Weighted query rewrites of a search scope, cached per (index alias, query text)."""
    def __init__(
        self,
        rewriter: QueryRewriter,
        config_factory: ThesaurusConfigFactory,
        resolver: IndexAliasResolver,
        cache: RewriteCache,
    ):
        self.rewriter = rewriter
        self.config_factory = config_factory
        self.resolver = resolver
        self.cache = cache

    @classmethod
    def from_config(cls, config: ThesaurusConfig | None = None, overrides: Dict[str, dict] | None = None) -> "ThesaurusIndex":
        config = config or ThesaurusConfig.from_env()
        if config.analysis_url:
            backend = HttpAnalysisBackend(config.analysis_url, timeout=config.analysis_timeout)
        elif config.dictionary_path:
            backend = DictionaryAnalysisBackend.from_json_file(config.dictionary_path)
        else:
            raise ThesaurusConfigError("either analysis_url or dictionary_path must be configured")
        return cls(
            QueryRewriter(SynonymLookup(backend)),
            ThesaurusConfigFactory(config, overrides),
            IndexAliasResolver(config.index_prefix),
            InMemoryRewriteCache(config.cache_max),
        )

    def get_query_rewrites(self, scope: SearchScope, query_text: str, original_boost: float = 1.0) -> Dict[str, float]:
        cache_key = self.cache_key(scope, query_text)
        rewrites = self.cache.load(cache_key)
        if rewrites is None:
            logger.debug("rewrite.cache miss key=%s", cache_key)
            rewrites = self.compute_query_rewrites(scope, query_text, original_boost)
            self.cache.save(cache_key, rewrites, self.cache_tags(scope))
        else:
            logger.debug("rewrite.cache hit key=%s", cache_key)
        return rewrites

    def compute_query_rewrites(self, scope: SearchScope, query_text: str, original_boost: float = 1.0) -> Dict[str, float]:
        config = self.config_factory.create(scope)
        return self.rewriter.compute_query_rewrites(
            self.resolver.index_alias(scope),
            query_text,
            config.synonym_stage(),
            config.expansion_stage(),
            original_boost,
        )

    def invalidate(self, scope: SearchScope) -> int:
        """Drop cached rewrites of the scope's thesaurus index (e.g. after a reindex)."""
        removed = self.cache.clean(self.cache_tags(scope))
        logger.info("rewrite.cache clean tags=%s removed=%d", self.cache_tags(scope), removed)
        return removed

    def cache_key(self, scope: SearchScope, query_text: str) -> str:
        return "|".join(self.cache_tags(scope) + [query_text])

    def cache_tags(self, scope: SearchScope) -> List[str]:
        return [self.resolver.index_alias(scope)]
