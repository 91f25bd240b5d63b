"""Keyword retrieval and prompt-context assembly over a contract-rules corpus."""

from .corpus import CorpusValidationError, RuleCorpus, parse_corpus
from .schema import CorpusSummary, FAQEntry, PricingTable, RuleChapter, ScoredResult
from .service import ContractRuleService

__all__ = [
    "ContractRuleService",
    "CorpusSummary",
    "CorpusValidationError",
    "FAQEntry",
    "PricingTable",
    "RuleChapter",
    "RuleCorpus",
    "ScoredResult",
    "parse_corpus",
]
