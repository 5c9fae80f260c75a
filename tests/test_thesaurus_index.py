import json
import pytest
from thesaurus.core import ThesaurusIndex, ThesaurusConfig, ThesaurusConfigFactory, ThesaurusConfigError, SearchScope, QueryRewriter
from thesaurus.core.cache import InMemoryRewriteCache
from thesaurus.core.lookup import SynonymLookup
from thesaurus.core.models import AnalyzedToken
from thesaurus.core.scope import IndexAliasResolver


class CountingBackend:
    def __init__(self):
        self.calls = []

    def analyze(self, index_name, text, analyzer):
        self.calls.append((index_name, text, analyzer))
        if analyzer == "synonym" and text == "shoes":
            return [AnalyzedToken("sneakers", "SYNONYM", 0, 5)]
        return []


def make_index(overrides=None):
    backend = CountingBackend()
    config = ThesaurusConfig(synonym_weight_divider=1, max_rewrites=1, expansion_enabled=False)
    index = ThesaurusIndex(
        QueryRewriter(SynonymLookup(backend)),
        ThesaurusConfigFactory(config, overrides),
        IndexAliasResolver("magento2", {1: "default"}),
        InMemoryRewriteCache(10),
    )
    return index, backend


def test_rewrites_are_cached_per_scope_and_query():
    index, backend = make_index()
    scope = SearchScope(1)
    assert index.get_query_rewrites(scope, "shoes") == {"sneakers": 1.0}
    assert index.get_query_rewrites(scope, "shoes") == {"sneakers": 1.0}
    assert backend.calls == [("magento2_default_thesaurus", "shoes", "synonym")]
    assert index.cache_key(scope, "shoes") == "magento2_default_thesaurus|shoes"
    assert index.cache.stats()["hits"] == 1


def test_empty_rewrites_are_cached_too():
    index, backend = make_index()
    scope = SearchScope(1)
    assert index.get_query_rewrites(scope, "hat") == {}
    assert index.get_query_rewrites(scope, "hat") == {}
    assert len(backend.calls) == 1


def test_invalidate_drops_only_scope_entries():
    index, backend = make_index()
    index.get_query_rewrites(SearchScope(1), "shoes")
    index.get_query_rewrites(SearchScope(2), "shoes")
    assert index.invalidate(SearchScope(1)) == 1
    index.get_query_rewrites(SearchScope(1), "shoes")
    index.get_query_rewrites(SearchScope(2), "shoes")
    assert [c[0] for c in backend.calls] == [
        "magento2_default_thesaurus",
        "magento2_2_thesaurus",
        "magento2_default_thesaurus",
    ]


def test_container_overrides():
    index, backend = make_index({"catalog_view_container": {"synonym_enabled": False}})
    assert index.get_query_rewrites(SearchScope(1, "catalog_view_container"), "shoes") == {}
    assert backend.calls == []


def test_from_config_with_dictionary(tmp_path):
    path = tmp_path / "thesaurus.json"
    path.write_text(json.dumps({
        "magento2_1_thesaurus": {
            "synonym": {"sleeve_dress": ["cardigan"]},
            "expansion": {"cardigan": ["knitwear"]},
        }
    }), encoding="utf-8")
    cfg = ThesaurusConfig(dictionary_path=path, synonym_weight_divider=1, expansion_enabled=True, expansion_weight_divider=2)
    index = ThesaurusIndex.from_config(cfg)
    out = index.get_query_rewrites(SearchScope(1), "long sleeve dress")
    assert out == pytest.approx({"long cardigan": 1.0, "long knitwear": 0.5})


def test_from_config_requires_a_backend():
    with pytest.raises(ThesaurusConfigError):
        ThesaurusIndex.from_config(ThesaurusConfig())
