from __future__ import annotations

import json
from pathlib import Path

from .corpus import RuleCorpus, parse_corpus


def load_corpus(path: str | Path = "data/contract-rules.json") -> RuleCorpus:
    with Path(path).open("r", encoding="utf-8") as file_handle:
        raw = json.load(file_handle)
    return parse_corpus(raw)
