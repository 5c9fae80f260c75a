import json
import logging
from thesaurus.core import QueryRewriter, StageParameters
from thesaurus.core.logging import JsonFormatter, build_formatter, logger
from thesaurus.core.lookup import SynonymLookup


class EmptyBackend:
    def analyze(self, index_name, text, analyzer):
        return []


def test_compute_query_rewrites_is_timed(caplog):
    rw = QueryRewriter(SynonymLookup(EmptyBackend()))
    with caplog.at_level(logging.DEBUG, logger="thesaurus"):
        rw.compute_query_rewrites("idx", "shoes", StageParameters(True, 1, 1), StageParameters(False, 1, 1))
    timings = [r.getMessage() for r in caplog.records if r.getMessage().startswith("timing ")]
    assert len(timings) == 1
    assert timings[0].endswith("step=compute_query_rewrites")


def test_stage_lookup_debug_record_carries_context(caplog):
    rw = QueryRewriter(SynonymLookup(EmptyBackend()))
    with caplog.at_level(logging.DEBUG, logger="thesaurus"):
        rw.synonym_rewrites("idx", "red shoes", "synonym", 2)
    record = next(r for r in caplog.records if r.getMessage().startswith("rewrite.lookup"))
    assert (record.index, record.analyzer, record.query) == ("idx", "synonym", "red shoes")


def test_json_formatter_emits_rewrite_context():
    record = logger.makeRecord(
        "thesaurus", logging.WARNING, __file__, 1, "lookup.failed reason=%s", ("boom",), None,
        extra={"index": "magento2_1_thesaurus", "analyzer": "synonym"},
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "lookup.failed reason=boom"
    assert payload["level"] == "WARNING"
    assert payload["index"] == "magento2_1_thesaurus"
    assert payload["analyzer"] == "synonym"
    assert "query" not in payload


def test_build_formatter_selects_output():
    assert isinstance(build_formatter(True), JsonFormatter)
    assert not isinstance(build_formatter(False), JsonFormatter)
