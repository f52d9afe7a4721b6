"""CLI query handler: ask a question, print cited answer lines and token usage."""

import argparse
import logging
import sys

from terusrag.application.dto.query_dto import QueryRequest
from terusrag.config.composition import build_query_use_case
from terusrag.config.settings import AppSettings
from terusrag.domain.errors import ProviderError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="terusrag-query")
    parser.add_argument("question", help="Question to answer from the indexed content")
    parser.add_argument("--timeout", type=float, default=None, help="Provider timeout (s)")
    args = parser.parse_args(argv)

    settings = AppSettings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    uc = build_query_use_case(settings)
    result = uc.execute(QueryRequest(question=args.question, timeout_s=args.timeout))

    if result.ok and result.value is not None:
        answer = result.value
        if not answer.answer:
            print("No answer found in the indexed content.")
        for i, c in enumerate(answer.answer, 1):
            print(f"[{i}] {c.content}")
            print(f"    {c.title} <{c.viewurl}>")
        print(
            f"\nToken usage: Prompt: {answer.prompt_token_count}, "
            f"Response: {answer.response_token_count}, Total: {answer.total_token_count}"
        )
        return 0

    err = result.error
    print(f"[ERROR] {type(err).__name__}: {err}", file=sys.stderr)
    if isinstance(err, ProviderError) and err.status is not None:
        print(f"  → Upstream status: {err.status}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
