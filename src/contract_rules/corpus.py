from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .schema import (
    PRICING_CATEGORIES,
    RISK_LEVELS,
    CorpusSummary,
    FAQEntry,
    PricingTable,
    RuleChapter,
)


class CorpusValidationError(ValueError):
    """Raised when a rule corpus does not match the expected shape."""


class RuleCorpus:
    """Immutable, in-memory contract-rules corpus.

    Chapters keep their declaration order; lookups by id go through a
    read-only index built once at construction.
    """

    def __init__(
        self,
        title: str,
        version: str,
        chapters: Iterable[RuleChapter],
        faq: Iterable[FAQEntry] = (),
        pricing: PricingTable | None = None,
    ):
        self._title = title
        self._version = version
        self._chapters = tuple(chapters)
        self._faq = tuple(faq)
        self._pricing = pricing

        index: dict[str, RuleChapter] = {}
        for chapter in self._chapters:
            if chapter.chapter_id in index:
                raise CorpusValidationError(f"duplicate chapter id: {chapter.chapter_id!r}")
            index[chapter.chapter_id] = chapter
        self._index = MappingProxyType(index)

    @property
    def title(self) -> str:
        return self._title

    @property
    def version(self) -> str:
        return self._version

    def get_by_id(self, chapter_id: str) -> RuleChapter | None:
        return self._index.get(chapter_id)

    def all_chapters(self) -> tuple[RuleChapter, ...]:
        return self._chapters

    def all_faq(self) -> tuple[FAQEntry, ...]:
        return self._faq

    def pricing(self) -> PricingTable | None:
        return self._pricing

    def summary(self) -> CorpusSummary:
        """Count chapters, FAQ entries and chapters per risk level."""
        risk_levels = {level: 0 for level in RISK_LEVELS}
        for chapter in self._chapters:
            risk_levels[chapter.risk_level] += 1
        return CorpusSummary(
            title=self._title,
            version=self._version,
            total_chapters=len(self._chapters),
            total_faq=len(self._faq),
            risk_levels=risk_levels,
        )


def _require_text(record: Mapping[str, Any], key: str, where: str) -> str:
    value = record.get(key)
    if not isinstance(value, str) or not value.strip():
        raise CorpusValidationError(f"{where}: missing or empty field {key!r}")
    return value


def _parse_chapter(record: Any, position: int) -> RuleChapter:
    where = f"chapters[{position}]"
    if not isinstance(record, Mapping):
        raise CorpusValidationError(f"{where}: expected an object, got {type(record).__name__}")

    chapter_id = _require_text(record, "id", where)
    where = f"chapters[{position}] ({chapter_id})"
    title = _require_text(record, "title", where)
    content = _require_text(record, "content", where)

    tags = record.get("tags")
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise CorpusValidationError(f"{where}: field 'tags' must be a list of strings")

    risk_level = record.get("riskLevel")
    if risk_level not in RISK_LEVELS:
        raise CorpusValidationError(
            f"{where}: field 'riskLevel' must be one of {', '.join(RISK_LEVELS)}, got {risk_level!r}"
        )

    return RuleChapter(
        chapter_id=chapter_id,
        title=title,
        content=content,
        tags=tuple(tags),
        risk_level=risk_level,
    )


def _parse_faq(record: Any, position: int) -> FAQEntry:
    where = f"faq[{position}]"
    if not isinstance(record, Mapping):
        raise CorpusValidationError(f"{where}: expected an object, got {type(record).__name__}")
    return FAQEntry(
        question=_require_text(record, "question", where),
        answer=_require_text(record, "answer", where),
    )


def _parse_pricing(raw: Any) -> PricingTable:
    if not isinstance(raw, Mapping):
        raise CorpusValidationError(f"pricing: expected an object, got {type(raw).__name__}")

    unknown = sorted(set(raw) - set(PRICING_CATEGORIES))
    if unknown:
        raise CorpusValidationError(f"pricing: unknown categories {', '.join(unknown)}")

    descriptions: dict[str, Mapping[str, Any]] = {}
    for category, description in raw.items():
        if not isinstance(description, Mapping):
            raise CorpusValidationError(f"pricing.{category}: expected an object")
        descriptions[category] = MappingProxyType(dict(description))
    return PricingTable(**descriptions)


def parse_corpus(raw: Mapping[str, Any]) -> RuleCorpus:
    """Validate a decoded corpus document and build a `RuleCorpus`.

    Args:
        raw: Decoded JSON object with ``chapters``, ``faq`` and optional
            ``pricing`` keys.

    Returns:
        The validated, immutable corpus.

    Raises:
        CorpusValidationError: If any chapter, FAQ entry or pricing entry is
            malformed. Malformed entries are never skipped.
    """
    if not isinstance(raw, Mapping):
        raise CorpusValidationError(f"corpus: expected an object, got {type(raw).__name__}")

    chapters_raw = raw.get("chapters")
    if not isinstance(chapters_raw, list):
        raise CorpusValidationError("corpus: field 'chapters' must be a list")

    faq_raw = raw.get("faq", [])
    if not isinstance(faq_raw, list):
        raise CorpusValidationError("corpus: field 'faq' must be a list")

    pricing_raw = raw.get("pricing")

    return RuleCorpus(
        title=str(raw.get("title", "")),
        version=str(raw.get("version", "")),
        chapters=[_parse_chapter(record, idx) for idx, record in enumerate(chapters_raw)],
        faq=[_parse_faq(record, idx) for idx, record in enumerate(faq_raw)],
        pricing=_parse_pricing(pricing_raw) if pricing_raw is not None else None,
    )
