"""Tests for corpus.py — RuleCorpus accessors and parse_corpus validation."""
from __future__ import annotations

import copy

import pytest

from contract_rules.corpus import CorpusValidationError, RuleCorpus, parse_corpus
from contract_rules.schema import CorpusSummary, FAQEntry, PricingTable, RuleChapter


def _chapter(chapter_id: str, risk_level: str = "low") -> RuleChapter:
    return RuleChapter(chapter_id=chapter_id, title="T", content="C", tags=(), risk_level=risk_level)


# ---------------------------------------------------------------------------
# RuleCorpus accessors
# ---------------------------------------------------------------------------

class TestRuleCorpus:
    def test_get_by_id_hit(self, corpus):
        chapter = corpus.get_by_id("ch3")
        assert chapter is not None
        assert chapter.title == "Chapter 3 Scope and Compensation"

    def test_get_by_id_miss_returns_none(self, corpus):
        assert corpus.get_by_id("missing") is None

    def test_all_chapters_in_declaration_order(self, corpus):
        assert [c.chapter_id for c in corpus.all_chapters()] == ["ch1", "ch2", "ch3", "ch4", "ch5"]

    def test_all_faq_in_declaration_order(self, corpus):
        questions = [entry.question for entry in corpus.all_faq()]
        assert questions == ["When is the session fee paid?", "Can the instructor reuse our slides?"]

    def test_pricing_present(self, corpus):
        pricing = corpus.pricing()
        assert isinstance(pricing, PricingTable)
        assert pricing.training["rate"] == 5000
        assert pricing.meetings is None

    def test_pricing_absent(self):
        corpus = RuleCorpus(title="T", version="1", chapters=[_chapter("a")])
        assert corpus.pricing() is None

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CorpusValidationError, match="duplicate"):
            RuleCorpus(title="T", version="1", chapters=[_chapter("a"), _chapter("a")])

    def test_chapters_are_immutable_sequence(self, corpus):
        assert isinstance(corpus.all_chapters(), tuple)


class TestSummary:
    def test_counts(self, corpus):
        summary = corpus.summary()
        assert isinstance(summary, CorpusSummary)
        assert summary.title == "Test Contract Rules"
        assert summary.version == "2.1"
        assert summary.total_chapters == 5
        assert summary.total_faq == 2
        assert summary.risk_levels == {"low": 1, "medium": 2, "high": 2}

    def test_all_risk_levels_reported_when_empty(self):
        corpus = RuleCorpus(title="T", version="1", chapters=[])
        assert corpus.summary().risk_levels == {"low": 0, "medium": 0, "high": 0}

    def test_summary_is_repeatable(self, corpus):
        assert corpus.summary() == corpus.summary()


# ---------------------------------------------------------------------------
# parse_corpus
# ---------------------------------------------------------------------------

class TestParseCorpus:
    def test_builds_typed_corpus(self, raw_corpus):
        corpus = parse_corpus(raw_corpus)
        chapter = corpus.get_by_id("ch1")
        assert chapter.tags == ("purpose", "definitions")
        assert chapter.risk_level == "low"
        assert corpus.all_faq()[0] == FAQEntry(
            question="When is the session fee paid?",
            answer="At the end of the following month.",
        )

    def test_faq_and_pricing_optional(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        del raw["faq"]
        del raw["pricing"]
        corpus = parse_corpus(raw)
        assert corpus.all_faq() == ()
        assert corpus.pricing() is None

    @pytest.mark.parametrize("field", ["id", "title", "content"])
    def test_missing_chapter_field_fails(self, raw_corpus, field):
        raw = copy.deepcopy(raw_corpus)
        del raw["chapters"][1][field]
        with pytest.raises(CorpusValidationError, match=field):
            parse_corpus(raw)

    def test_empty_title_fails(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        raw["chapters"][0]["title"] = "   "
        with pytest.raises(CorpusValidationError, match="title"):
            parse_corpus(raw)

    def test_error_names_the_chapter(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        del raw["chapters"][2]["content"]
        with pytest.raises(CorpusValidationError, match="ch3"):
            parse_corpus(raw)

    def test_tags_must_be_list_of_strings(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        raw["chapters"][0]["tags"] = "purpose"
        with pytest.raises(CorpusValidationError, match="tags"):
            parse_corpus(raw)

    def test_unknown_risk_level_fails(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        raw["chapters"][0]["riskLevel"] = "critical"
        with pytest.raises(CorpusValidationError, match="riskLevel"):
            parse_corpus(raw)

    def test_duplicate_chapter_ids_fail(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        raw["chapters"][1]["id"] = "ch1"
        with pytest.raises(CorpusValidationError, match="duplicate"):
            parse_corpus(raw)

    def test_faq_missing_answer_fails(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        del raw["faq"][0]["answer"]
        with pytest.raises(CorpusValidationError, match="answer"):
            parse_corpus(raw)

    def test_unknown_pricing_category_fails(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        raw["pricing"]["travel"] = {"rate": 1}
        with pytest.raises(CorpusValidationError, match="travel"):
            parse_corpus(raw)

    def test_non_object_pricing_entry_fails(self, raw_corpus):
        raw = copy.deepcopy(raw_corpus)
        raw["pricing"]["training"] = 5000
        with pytest.raises(CorpusValidationError, match="training"):
            parse_corpus(raw)

    def test_chapters_must_be_list(self):
        with pytest.raises(CorpusValidationError, match="chapters"):
            parse_corpus({"title": "T", "version": "1"})

    def test_is_value_error(self):
        assert issubclass(CorpusValidationError, ValueError)
