from __future__ import annotations
from typing import Dict

from .models import SearchScope

INDEX_IDENTIFIER = "thesaurus"


class IndexAliasResolver:
    """Maps a search scope to the alias of its store's thesaurus index."""
    def __init__(self, index_prefix: str = "magento2", store_codes: Dict[int, str] | None = None):
        self.index_prefix = index_prefix
        self.store_codes = store_codes or {}

    def index_alias(self, scope: SearchScope, identifier: str = INDEX_IDENTIFIER) -> str:
        store_code = self.store_codes.get(scope.store_id, str(scope.store_id))
        return f"{self.index_prefix}_{store_code}_{identifier}"
