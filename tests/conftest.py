"""Shared pytest fixtures for contract_rules unit tests."""
from __future__ import annotations

import pytest

from contract_rules.corpus import RuleCorpus, parse_corpus


@pytest.fixture()
def raw_corpus() -> dict:
    return {
        "title": "Test Contract Rules",
        "version": "2.1",
        "chapters": [
            {
                "id": "ch1",
                "title": "Chapter 1 Purpose and Definitions",
                "content": "These rules govern training engagements with external instructors.",
                "tags": ["purpose", "definitions"],
                "riskLevel": "low",
            },
            {
                "id": "ch2",
                "title": "Chapter 2 Contract Formation",
                "content": "A contract is formed when both parties sign the written agreement.",
                "tags": ["formation", "signature"],
                "riskLevel": "medium",
            },
            {
                "id": "ch3",
                "title": "Chapter 3 Scope and Compensation",
                "content": "The instructor receives a fee of 5000 per session. Travel costs are reimbursed.",
                "tags": ["fee", "scope"],
                "riskLevel": "medium",
            },
            {
                "id": "ch4",
                "title": "Chapter 4 Intellectual Property",
                "content": "Copyright in training materials transfers to the company on acceptance.",
                "tags": ["copyright", "materials"],
                "riskLevel": "high",
            },
            {
                "id": "ch5",
                "title": "Chapter 5 Confidentiality",
                "content": "Participant lists are confidential and must not be disclosed.",
                "tags": ["confidentiality"],
                "riskLevel": "high",
            },
        ],
        "faq": [
            {
                "question": "When is the session fee paid?",
                "answer": "At the end of the following month.",
            },
            {
                "question": "Can the instructor reuse our slides?",
                "answer": "No, copyright transfers to the company.",
            },
        ],
        "pricing": {
            "training": {"rate": 5000, "unit": "per session"},
            "materials": {"rate": 2000, "unit": "per programme"},
        },
    }


@pytest.fixture()
def corpus(raw_corpus) -> RuleCorpus:
    return parse_corpus(raw_corpus)
