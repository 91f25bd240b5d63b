from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Additive relevance weights used by the keyword ranker.

    Hand-tuned values; adjust them against real questions rather than
    treating them as fixed.
    """

    title_phrase: int = 10
    title_token: int = 5
    content_token: int = 3
    tag_token: int = 4
    pricing_boost: int = 8


@dataclass(slots=True)
class ContextSettings:
    """Limits applied when assembling the prompt context block."""

    max_length: int = 2500
    top_k: int = 3
    excerpt_chars: int = 200
    faq_limit: int = 1


@dataclass(slots=True)
class Paths:
    """Common project paths used by the loader and scripts."""

    corpus_path: str = "data/contract-rules.json"


def load_settings() -> tuple[ContextSettings, Paths]:
    """Load environment-backed settings and return typed config objects.

    Returns:
        Tuple containing context-assembly limits and common path settings.
    """
    load_dotenv()
    defaults = ContextSettings()
    return (
        ContextSettings(
            max_length=int(os.getenv("CONTRACT_RULES_MAX_CONTEXT_CHARS", defaults.max_length)),
            top_k=int(os.getenv("CONTRACT_RULES_TOP_K", defaults.top_k)),
        ),
        Paths(corpus_path=os.getenv("CONTRACT_RULES_CORPUS_PATH", "data/contract-rules.json")),
    )
