from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, Mapping

RiskLevel = Literal["low", "medium", "high"]

RISK_LEVELS: tuple[str, ...] = ("low", "medium", "high")

PRICING_CATEGORIES: tuple[str, ...] = ("training", "meetings", "materials", "reporting", "others")


@dataclass(frozen=True, slots=True)
class RuleChapter:
    """One titled chapter of the contract-rules corpus."""

    chapter_id: str
    title: str
    content: str
    tags: tuple[str, ...]
    risk_level: RiskLevel


@dataclass(frozen=True, slots=True)
class FAQEntry:
    """Standalone question/answer pair shipped alongside the chapters."""

    question: str
    answer: str


@dataclass(frozen=True, slots=True)
class PricingTable:
    """Rate descriptions keyed by fixed pricing category.

    Each present category holds a structured rate description such as
    ``{"rate": 50000, "unit": "per session"}``.
    """

    training: Mapping[str, Any] | None = None
    meetings: Mapping[str, Any] | None = None
    materials: Mapping[str, Any] | None = None
    reporting: Mapping[str, Any] | None = None
    others: Mapping[str, Any] | None = None

    def items(self) -> Iterator[tuple[str, Mapping[str, Any]]]:
        for category in PRICING_CATEGORIES:
            description = getattr(self, category)
            if description is not None:
                yield category, description


@dataclass(frozen=True, slots=True)
class ScoredResult:
    """Chapter paired with its relevance score for a single query."""

    chapter: RuleChapter
    match_score: int = 0

    @property
    def chapter_id(self) -> str:
        return self.chapter.chapter_id

    @property
    def title(self) -> str:
        return self.chapter.title


@dataclass(slots=True)
class CorpusSummary:
    """Aggregate statistics about a loaded corpus."""

    title: str
    version: str
    total_chapters: int
    total_faq: int
    risk_levels: dict[str, int] = field(default_factory=dict)
