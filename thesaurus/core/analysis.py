from __future__ import annotations
"""Text analysis backends.

A backend runs a named analyzer ("synonym" or "expansion") of a thesaurus
index over a text and returns the analyzed tokens. Offsets are expressed in
characters of the submitted text.
"""
from typing import Dict, List, Protocol
from pathlib import Path
import json

import requests

from .models import AnalyzedToken, SYNONYM_TOKEN_TYPE

SYNONYM_ANALYZER = "synonym"
EXPANSION_ANALYZER = "expansion"


class AnalysisError(RuntimeError):
    """The backend could not analyze the text (unreachable, unknown index, bad payload)."""


class AnalysisBackend(Protocol):
    def analyze(self, index_name: str, text: str, analyzer: str) -> List[AnalyzedToken]:
        ...


class HttpAnalysisBackend:
    """Elasticsearch / OpenSearch `_analyze` API client."""
    def __init__(self, base_url: str, timeout: float = 5.0, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def analyze(self, index_name: str, text: str, analyzer: str) -> List[AnalyzedToken]:
        url = f"{self.base_url}/{index_name}/_analyze"
        try:
            resp = self.session.post(url, json={"text": text, "analyzer": analyzer}, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise AnalysisError(f"analyze failed index={index_name} analyzer={analyzer}: {exc}") from exc
        if not isinstance(payload, dict):
            raise AnalysisError(f"malformed analyze response from {url}: expected an object, got {type(payload).__name__}")
        try:
            return [AnalyzedToken.from_dict(t) for t in payload.get("tokens", [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise AnalysisError(f"malformed analyze response from {url}: {exc}") from exc


class DictionaryAnalysisBackend:
    """In-process stand-in for a whitespace tokenizer + synonym token filter.

    `indices` maps index name -> analyzer name -> term -> replacements.
    Multi-word terms and replacements are written with "_" between words,
    the way they are indexed in the thesaurus.
    """
    def __init__(self, indices: Dict[str, Dict[str, Dict[str, List[str]]]]):
        self.indices = {
            index: {
                analyzer: {term.lower(): list(values) for term, values in rules.items()}
                for analyzer, rules in analyzers.items()
            }
            for index, analyzers in indices.items()
        }

    @classmethod
    def from_json_file(cls, path: Path) -> "DictionaryAnalysisBackend":
        return cls(json.loads(Path(path).read_text(encoding="utf-8")))

    @staticmethod
    def _tokenize(text: str) -> List[tuple[str, int, int]]:
        words = []
        offset = 0
        for word in text.split(" "):
            if word:
                words.append((word, offset, offset + len(word)))
            offset += len(word) + 1
        return words

    def analyze(self, index_name: str, text: str, analyzer: str) -> List[AnalyzedToken]:
        if index_name not in self.indices:
            raise AnalysisError(f"no such index [{index_name}]")
        rules = self.indices[index_name].get(analyzer)
        if rules is None:
            raise AnalysisError(f"failed to find analyzer [{analyzer}]")
        tokens: List[AnalyzedToken] = []
        for word, start, end in self._tokenize(text):
            tokens.append(AnalyzedToken(word, "<ALPHANUM>", start, end))
            for replacement in rules.get(word.lower(), []):
                if replacement.lower() != word.lower():
                    tokens.append(AnalyzedToken(replacement, SYNONYM_TOKEN_TYPE, start, end))
        return tokens
