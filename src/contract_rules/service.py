from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from opentelemetry import trace

from .context import format_context
from .corpus import RuleCorpus
from .io_utils import load_corpus
from .retrieval import by_ids, by_risk_level, detect_pricing_intent, search_faq, search_rules
from .schema import CorpusSummary, FAQEntry, RuleChapter, ScoredResult
from .settings import ContextSettings, ScoringWeights
from .tracing import (
    ATTR_FAQ_MATCHES,
    ATTR_INPUT_VALUE,
    ATTR_OUTPUT_LENGTH,
    ATTR_PRICING_INTENT,
    ATTR_RETRIEVAL_DOCUMENTS,
    get_tracer,
    traced_search,
)

logger = logging.getLogger(__name__)


class ContractRuleService:
    """Keyword retrieval and context assembly over one contract-rules corpus.

    The service holds a reference to an immutable corpus. Each call reads that
    reference once, so `replace_corpus` never exposes a half-updated corpus
    to a call already in flight.
    """

    def __init__(
        self,
        corpus: RuleCorpus,
        weights: ScoringWeights | None = None,
        context_settings: ContextSettings | None = None,
    ):
        self._corpus = corpus
        self.weights = weights or ScoringWeights()
        self.context_settings = context_settings or ContextSettings()
        self._tracer = get_tracer("contract_rules.service")

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        weights: ScoringWeights | None = None,
        context_settings: ContextSettings | None = None,
    ) -> "ContractRuleService":
        return cls(load_corpus(path), weights=weights, context_settings=context_settings)

    @property
    def corpus(self) -> RuleCorpus:
        return self._corpus

    def replace_corpus(self, corpus: RuleCorpus) -> None:
        self._corpus = corpus
        logger.info("corpus replaced: %s %s (%d chapters)", corpus.title, corpus.version, len(corpus.all_chapters()))

    def search(self, query: str) -> list[ScoredResult]:
        corpus = self._corpus
        wrapped = traced_search(lambda q: search_rules(corpus.all_chapters(), q, self.weights), self._tracer)
        return wrapped(query)

    def search_faq(self, query: str, limit: int | None = None) -> list[FAQEntry]:
        return search_faq(self._corpus.all_faq(), query, limit=limit)

    def get_chapter(self, chapter_id: str) -> RuleChapter | None:
        return self._corpus.get_by_id(chapter_id)

    def by_risk_level(self, risk_level: str) -> list[ScoredResult]:
        return by_risk_level(self._corpus.all_chapters(), risk_level)

    def related_chapters(self, chapter_ids: Iterable[str]) -> list[ScoredResult]:
        return by_ids(self._corpus, chapter_ids)

    def summary(self) -> CorpusSummary:
        return self._corpus.summary()

    def format_context(self, query: str, max_length: int | None = None) -> str:
        """Build the prompt context block for a question.

        Args:
            query: Raw user question.
            max_length: Character budget; defaults to the configured one.

        Returns:
            Context string within the budget, never empty.
        """
        corpus = self._corpus
        settings = self.context_settings
        budget = max_length if max_length is not None else settings.max_length

        with self._tracer.start_as_current_span("format-context") as span:
            span.set_attribute(ATTR_INPUT_VALUE, query)
            try:
                pricing_intent = detect_pricing_intent(query)
                results = search_rules(corpus.all_chapters(), query, self.weights)
                faq_results = search_faq(corpus.all_faq(), query)
                context = format_context(
                    results,
                    faq_results,
                    question=query,
                    pricing_intent=pricing_intent,
                    pricing=corpus.pricing(),
                    max_length=budget,
                    top_k=settings.top_k,
                    excerpt_chars=settings.excerpt_chars,
                    faq_limit=settings.faq_limit,
                )
                span.set_attribute(ATTR_PRICING_INTENT, pricing_intent)
                span.set_attribute(ATTR_RETRIEVAL_DOCUMENTS, len(results))
                span.set_attribute(ATTR_FAQ_MATCHES, len(faq_results))
                span.set_attribute(ATTR_OUTPUT_LENGTH, len(context))
                span.set_status(trace.StatusCode.OK)
                return context
            except Exception as exc:
                span.set_status(trace.StatusCode.ERROR, str(exc))
                span.record_exception(exc)
                raise
