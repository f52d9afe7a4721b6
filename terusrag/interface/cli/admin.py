"""CLI for admin tasks: schema creation and manual indexing of content."""

import argparse
import logging
import sys

from terusrag.config.composition import (
    build_chunk_store,
    build_embedding,
    build_provider,
    build_session_factory,
)
from terusrag.config.settings import AppSettings
from terusrag.domain.errors import DomainError
from terusrag.domain.models import Chunk
from terusrag.infrastructure.persistence import database
from terusrag.infrastructure.persistence.tables import ContentItemRecord


def cmd_init_db(args, settings: AppSettings) -> int:
    """Create the chunk and content item tables."""
    database.create_tables(database.build_engine(settings.database_url))
    print(f"✓ Tables ready in {settings.database_url}")
    return 0


def cmd_add_item(args, settings: AppSettings) -> int:
    """Register (or rename) the content item chunks point back to."""
    factory = build_session_factory(settings)
    with factory() as session, session.begin():
        session.merge(
            ContentItemRecord(
                moduletype=args.moduletype,
                moduleid=args.moduleid,
                title=args.title,
                visible=not args.hidden,
            )
        )
    print(f"✓ {args.moduletype} {args.moduleid} '{args.title}' saved")
    return 0


def cmd_add_chunk(args, settings: AppSettings) -> int:
    """Embed one text with the configured backend and upsert it as a chunk."""
    embedding = build_embedding(settings, build_provider(settings))
    store = build_chunk_store(build_session_factory(settings))
    try:
        vector = embedding.embed_query(args.text)
        chunk_id = store.upsert(
            Chunk(
                id=0,
                content=args.text,
                embedding=tuple(vector),
                moduletype=args.moduletype,
                moduleid=args.moduleid,
                title=args.title or "",
            )
        )
    except DomainError as ex:
        print(f"✗ Failed: {ex}", file=sys.stderr)
        return 1
    print(f"✓ Chunk {chunk_id} stored ({len(vector)}-d embedding)")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="terusrag-admin")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create database tables").set_defaults(func=cmd_init_db)

    p_item = sub.add_parser("add-item", help="Register a content item")
    p_item.add_argument("--moduletype", default="course")
    p_item.add_argument("--moduleid", type=int, required=True)
    p_item.add_argument("--title", required=True)
    p_item.add_argument("--hidden", action="store_true", help="Exclude from citations")
    p_item.set_defaults(func=cmd_add_item)

    p_chunk = sub.add_parser("add-chunk", help="Embed and store one chunk of text")
    p_chunk.add_argument("--moduletype", default="course")
    p_chunk.add_argument("--moduleid", type=int, required=True)
    p_chunk.add_argument("--title", default="")
    p_chunk.add_argument("--text", required=True)
    p_chunk.set_defaults(func=cmd_add_chunk)

    args = parser.parse_args(argv)
    settings = AppSettings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
