from __future__ import annotations

import logging
import string
from typing import Iterable, Sequence

from .corpus import RuleCorpus
from .schema import RISK_LEVELS, FAQEntry, RuleChapter, ScoredResult
from .settings import ScoringWeights

logger = logging.getLogger(__name__)

# Terms in a question that signal it is about cost or payment.
PRICING_INTENT_TERMS: tuple[str, ...] = (
    "price",
    "pricing",
    "fee",
    "compensation",
    "unit cost",
    "cost",
    "expense",
    "payment",
    "amount",
    "料金",
    "報酬",
    "単価",
    "費用",
    "支払",
    "金額",
)

# Terms in a chapter that mark it as pricing material.
PRICING_CHAPTER_TERMS: tuple[str, ...] = (
    "compensation",
    "fee",
    "payment",
    "yen",
    "報酬",
    "料金",
    "支払",
    "円",
)

_TOKEN_STRIP = string.punctuation + "、。，．！？「」『』（）【】・：；"


def normalize_query(query: str) -> str:
    return query.lower().strip()


def tokenize(query: str) -> list[str]:
    """Split a query on whitespace and drop single-character tokens.

    Surrounding punctuation is stripped from each token first, so
    ``"fee?"`` contributes ``"fee"``.
    """
    tokens = (word.strip(_TOKEN_STRIP) for word in normalize_query(query).split())
    return [token for token in tokens if len(token) > 1]


def detect_pricing_intent(query: str) -> bool:
    normalized = normalize_query(query)
    return any(term in normalized for term in PRICING_INTENT_TERMS)


def score_chapter(
    chapter: RuleChapter,
    normalized_query: str,
    tokens: Sequence[str],
    pricing_intent: bool,
    weights: ScoringWeights = ScoringWeights(),
) -> int:
    """Compute the additive keyword score of one chapter.

    Args:
        chapter: Chapter to score.
        normalized_query: Lowercased, trimmed query text.
        tokens: Query tokens produced by `tokenize`.
        pricing_intent: Whether the query asks about cost or payment.
        weights: Signal weights to apply.

    Returns:
        Non-negative integer score; 0 means no signal matched.
    """
    title = chapter.title.lower()
    content = chapter.content.lower()
    tags = [tag.lower() for tag in chapter.tags]

    score = 0
    if normalized_query and normalized_query in title:
        score += weights.title_phrase

    for token in tokens:
        if token in title:
            score += weights.title_token
        if token in content:
            score += weights.content_token
        if any(token in tag for tag in tags):
            score += weights.tag_token

    if pricing_intent and any(term in title or term in content for term in PRICING_CHAPTER_TERMS):
        score += weights.pricing_boost

    return score


def search_rules(
    chapters: Iterable[RuleChapter],
    query: str,
    weights: ScoringWeights = ScoringWeights(),
) -> list[ScoredResult]:
    """Rank chapters against a free-text query.

    Args:
        chapters: Chapters in corpus order.
        query: Raw user question.
        weights: Signal weights to apply.

    Returns:
        Chapters with a positive score, highest first. Ties keep corpus order.
    """
    normalized = normalize_query(query)
    tokens = tokenize(query)
    pricing_intent = detect_pricing_intent(query)

    scored = [
        ScoredResult(chapter=chapter, match_score=score_chapter(chapter, normalized, tokens, pricing_intent, weights))
        for chapter in chapters
    ]
    matched = [result for result in scored if result.match_score > 0]
    # sorted() is stable, so equal scores stay in corpus order.
    ranked = sorted(matched, key=lambda result: result.match_score, reverse=True)

    logger.debug(
        "search query=%r tokens=%d pricing_intent=%s matched=%d",
        normalized,
        len(tokens),
        pricing_intent,
        len(ranked),
    )
    return ranked


def search_faq(faq: Iterable[FAQEntry], query: str, limit: int | None = None) -> list[FAQEntry]:
    """Return FAQ entries mentioning the query or any of its tokens.

    A whole-query match counts double; entries are ordered by match count
    and keep their original order on ties.
    """
    normalized = normalize_query(query)
    tokens = tokenize(query)

    matches: list[tuple[int, FAQEntry]] = []
    for entry in faq:
        text = f"{entry.question}\n{entry.answer}".lower()
        hits = 2 if normalized and normalized in text else 0
        hits += sum(1 for token in tokens if token in text)
        if hits > 0:
            matches.append((hits, entry))

    ranked = [entry for _, entry in sorted(matches, key=lambda item: item[0], reverse=True)]
    return ranked[:limit] if limit is not None else ranked


def by_risk_level(chapters: Iterable[RuleChapter], risk_level: str) -> list[ScoredResult]:
    """Filter chapters by risk level, keeping corpus order and a zero score."""
    if risk_level not in RISK_LEVELS:
        raise ValueError(f"unknown risk level {risk_level!r}; expected one of {', '.join(RISK_LEVELS)}")
    return [ScoredResult(chapter=chapter) for chapter in chapters if chapter.risk_level == risk_level]


def by_ids(corpus: RuleCorpus, chapter_ids: Iterable[str]) -> list[ScoredResult]:
    """Look up chapters in the order given, skipping unknown ids."""
    results: list[ScoredResult] = []
    for chapter_id in chapter_ids:
        chapter = corpus.get_by_id(chapter_id)
        if chapter is not None:
            results.append(ScoredResult(chapter=chapter))
    return results
