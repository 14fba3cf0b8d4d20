"""Command-line RAG smoke test — index the CRM data and ask one question.

Usage:
    python -m app.cli "Which deals are in negotiation?"
    python -m app.cli --user-id alice --no-reindex "Who is Jane?"

Prints the answer and its sources as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from app.config import get_settings
from app.domain.exceptions import RecordFetchError, UpstreamProviderError
from app.infrastructure.dependencies import build_crm_repository, build_rag_service
from app.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_QUESTION = "Summarize contacts and deals."
DEFAULT_USER_ID = "default"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m app.cli",
        description="Index the CRM records and answer a question against them.",
    )
    parser.add_argument(
        "question",
        nargs="*",
        help=f"Question to ask (default: {DEFAULT_QUESTION!r})",
    )
    parser.add_argument(
        "--user-id",
        default=DEFAULT_USER_ID,
        help="Index key to build and query (default: %(default)s)",
    )
    parser.add_argument(
        "--no-reindex",
        action="store_true",
        help="Skip the explicit reindex; the query still builds the index if it is missing",
    )
    return parser.parse_args(argv)


async def run(user_id: str, question: str, reindex: bool = True) -> dict:
    from app.infrastructure.database.session import engine

    service = build_rag_service(get_settings(), build_crm_repository())
    try:
        if reindex:
            chunks = await service.index(user_id)
            logger.info("Indexed %d chunks for user %s", chunks, user_id)
        result = await service.query(user_id, question)
    finally:
        await engine.dispose()
    return asdict(result)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()

    question = " ".join(args.question).strip() or DEFAULT_QUESTION
    try:
        result = asyncio.run(run(args.user_id, question, reindex=not args.no_reindex))
    except (RecordFetchError, UpstreamProviderError) as e:
        logger.error("RAG query failed: %s", e)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
