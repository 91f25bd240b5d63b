from __future__ import annotations

SYSTEM_PROMPT_TEMPLATE = (
    "You are an expert on outsourced training service contracts. "
    "Answer by quoting and referring to the contract rules, in clear professional language.\n\n"
    "Contract rules reference:\n{rule_context}\n\n"
    "{extra_context}"
    "Question: {question}\n\n"
    "When answering:\n"
    "1. Quote the contract rules, including chapter and clause numbers.\n"
    "2. Ground the answer in the rules, not in general knowledge.\n"
    "3. Name the relevant chapters explicitly (for example \"Chapter 3 Scope and Compensation\").\n"
    "4. Write in Markdown with headings, lists and emphasis where useful.\n"
    "5. Keep what the rules say clearly separate from general knowledge."
)


def build_system_prompt(question: str, rule_context: str, extra_context: str | None = None) -> str:
    extra = f"Additional reference: {extra_context}\n\n" if extra_context else ""
    return SYSTEM_PROMPT_TEMPLATE.format(rule_context=rule_context, extra_context=extra, question=question)
