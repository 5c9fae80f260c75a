from .config import ThesaurusConfig, ThesaurusConfigFactory, ThesaurusConfigError
from .models import SearchScope, StageParameters, AnalyzedToken, AnalysisResult
from .rewriter import QueryRewriter, combine_synonyms, weighted_rewrites
from .index import ThesaurusIndex
from .logging import logger
from .combinatorics import query_combinations, WORD_DELIMITER
