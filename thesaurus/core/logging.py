from __future__ import annotations
"""Logging for the rewriting engine.

Records may carry rewrite context through `extra=` (index, analyzer, query);
the JSON formatter (THESAURUS_LOG_JSON=1) emits those as top-level fields.
"""
import logging, time, functools, os, json

CONTEXT_FIELDS = ("index", "analyzer", "query")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": int(record.created * 1000),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        return json.dumps(payload, ensure_ascii=False)


def build_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return JsonFormatter()
    return logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')


logger = logging.getLogger("thesaurus")
if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(build_formatter(os.getenv("THESAURUS_LOG_JSON", "0") == "1"))
    logger.addHandler(_handler)
logger.setLevel(os.getenv("THESAURUS_LOG_LEVEL", "INFO").upper())


def timed(name: str | None = None):
    """Log the duration of each call at debug level as `timing ms=... step=...`."""
    def deco(func):
        label = name or func.__name__
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                dur = (time.perf_counter() - start) * 1000
                logger.debug("timing ms=%.1f step=%s", dur, label)
        return wrapper
    return deco
