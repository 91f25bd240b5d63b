"""Assembly of the bounded context block embedded in the answer prompt."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from .schema import FAQEntry, PricingTable, ScoredResult

logger = logging.getLogger(__name__)

CONTEXT_HEADER = "Reference material from the contract rules:"
CHAPTERS_HEADING = "Relevant contract rules:"
FAQ_HEADING = "Frequently asked question:"
CLOSING_INSTRUCTION = (
    "Base your answer on the contract rules above and cite the chapters you rely on. "
    "If they do not cover the question, say so instead of answering from general knowledge."
)
PRICING_SUMMARY_CHARS = 300

_SEPARATOR = "\n\n"


def excerpt(text: str, limit: int) -> str:
    """Collapse whitespace and cut `text` to `limit` characters plus an ellipsis."""
    flattened = " ".join(text.split())
    if len(flattened) <= limit:
        return flattened
    return flattened[:limit] + "..."


def _describe_rate(description: Mapping[str, Any]) -> str:
    return ", ".join(f"{key}: {value}" for key, value in description.items())


def format_pricing_summary(pricing: PricingTable, limit: int = PRICING_SUMMARY_CHARS) -> str:
    parts = [
        f"{category} ({_describe_rate(description)})" if description else category
        for category, description in pricing.items()
    ]
    return excerpt("Pricing summary: " + "; ".join(parts), limit)


def _chapter_block(results: Sequence[ScoredResult], excerpt_chars: int) -> str:
    lines = [CHAPTERS_HEADING]
    for idx, result in enumerate(results, start=1):
        chapter = result.chapter
        lines.append(f"{idx}. {chapter.title}: {excerpt(chapter.content, excerpt_chars)}")
        lines.append(f"   Risk level: {chapter.risk_level}")
    return "\n".join(lines)


def _faq_block(entries: Sequence[FAQEntry], excerpt_chars: int) -> str:
    lines = [FAQ_HEADING]
    for entry in entries:
        lines.append(f"Q: {excerpt(entry.question, excerpt_chars)}")
        lines.append(f"A: {excerpt(entry.answer, excerpt_chars)}")
    return "\n".join(lines)


def format_context(
    results: Sequence[ScoredResult],
    faq_results: Sequence[FAQEntry],
    question: str,
    pricing_intent: bool,
    pricing: PricingTable | None = None,
    max_length: int = 2500,
    top_k: int = 3,
    excerpt_chars: int = 200,
    faq_limit: int = 1,
) -> str:
    """Render ranked chapters, FAQ matches and pricing into one context string.

    Sections appear in a fixed order: pricing summary, top chapters, FAQ,
    closing instruction. Each item is cut to `excerpt_chars` first; a section
    that would push the output past `max_length` is left out, so earlier
    sections are never shortened to make room for later ones. The chapter
    section drops its lowest-ranked items until it fits.

    Args:
        results: Ranked chapter results, best first. May be empty.
        faq_results: Matching FAQ entries, best first. May be empty.
        question: Raw question text, used for diagnostics only.
        pricing_intent: Whether the question asks about cost or payment.
        pricing: Optional pricing table of the corpus.
        max_length: Character budget for the whole output.
        top_k: Maximum number of chapters rendered.
        excerpt_chars: Per-item content cap.
        faq_limit: Maximum number of FAQ entries rendered.

    Returns:
        The context string. It always contains the header and the closing
        instruction, even when nothing matched.

    Raises:
        ValueError: If `max_length` cannot hold the header and closing
            instruction.
    """
    frame = len(CONTEXT_HEADER) + len(_SEPARATOR) + len(CLOSING_INSTRUCTION)
    if max_length < frame:
        raise ValueError(f"max_length={max_length} is smaller than the fixed context frame ({frame} chars)")

    remaining = max_length - frame
    sections: list[str] = []

    def admit(block: str) -> bool:
        nonlocal remaining
        cost = len(block) + len(_SEPARATOR)
        if cost > remaining:
            return False
        sections.append(block)
        remaining -= cost
        return True

    if pricing_intent and pricing is not None:
        admit(format_pricing_summary(pricing))

    top_results = list(results[:top_k])
    while top_results and not admit(_chapter_block(top_results, excerpt_chars)):
        top_results.pop()

    faq_entries = list(faq_results[:faq_limit])
    faq_rendered = bool(faq_entries) and admit(_faq_block(faq_entries, excerpt_chars))

    logger.debug(
        "context question=%r pricing_intent=%s chapters=%d/%d faq=%d/%d",
        question,
        pricing_intent,
        len(top_results),
        len(results),
        len(faq_entries) if faq_rendered else 0,
        len(faq_results),
    )
    return _SEPARATOR.join([CONTEXT_HEADER, *sections, CLOSING_INSTRUCTION])
