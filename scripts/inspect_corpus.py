import sys
from dataclasses import asdict

from contract_rules import ContractRuleService
from contract_rules.settings import load_settings


def main() -> None:
    """Print corpus statistics, ranked chapters and the context block for one question."""
    context_settings, paths = load_settings()
    service = ContractRuleService.from_path(paths.corpus_path, context_settings=context_settings)
    question = " ".join(sys.argv[1:]) or "What is the compensation fee?"

    print(asdict(service.summary()))
    for result in service.search(question):
        print(f"{result.match_score:>4}  {result.chapter_id}  {result.title}")
    print()
    print(service.format_context(question))


if __name__ == "__main__":
    main()
