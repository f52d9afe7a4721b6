from __future__ import annotations

import hashlib
import logging
from dataclasses import replace

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from terusrag.application.ports.chunk_store_port import ChunkStorePort
from terusrag.application.ports.clock_port import ClockPort
from terusrag.domain.errors import ChunkStoreError
from terusrag.domain.models import Chunk
from terusrag.domain.services.embedding_codec import decode_embedding, encode_embedding
from terusrag.infrastructure.persistence.tables import ChunkRecord

logger = logging.getLogger(__name__)


def content_hash(content: str) -> str:
    return hashlib.sha1(content.encode("utf-8")).hexdigest()


class SqlAlchemyChunkStore(ChunkStorePort):
    """Chunks in a relational table; embeddings stored as JSON text."""

    def __init__(self, session_factory: sessionmaker[Session], clock: ClockPort) -> None:
        self._session_factory = session_factory
        self._clock = clock

    @staticmethod
    def _to_domain(rec: ChunkRecord) -> Chunk:
        embedding = decode_embedding(rec.embedding)
        if embedding is None and rec.embedding:
            logger.warning("Chunk %s has an undecodable embedding; similarity will be 0", rec.id)
        return Chunk(
            id=rec.id,
            content=rec.content,
            embedding=embedding,
            moduletype=rec.moduletype,
            moduleid=rec.moduleid,
            contenthash=rec.contenthash,
            title=rec.title,
            timecreated=rec.timecreated,
            timemodified=rec.timemodified,
        )

    def load_corpus(self) -> list[Chunk]:
        try:
            with self._session_factory() as session:
                records = session.scalars(select(ChunkRecord).order_by(ChunkRecord.id)).all()
                return [self._to_domain(r) for r in records]
        except SQLAlchemyError as ex:
            raise ChunkStoreError(f"loading corpus failed: {ex}") from ex

    def get_chunk(self, chunk_id: int) -> Chunk | None:
        try:
            with self._session_factory() as session:
                rec = session.get(ChunkRecord, chunk_id)
                return self._to_domain(rec) if rec is not None else None
        except OverflowError:
            # Id does not fit the integer column, so no row can have it.
            logger.debug("Chunk id %s is out of range", chunk_id)
            return None
        except SQLAlchemyError as ex:
            raise ChunkStoreError(f"loading chunk {chunk_id} failed: {ex}") from ex

    def upsert(self, chunk: Chunk) -> int:
        """Insert the chunk, or update the row with the same content hash and owner."""
        if not chunk.contenthash:
            chunk = replace(chunk, contenthash=content_hash(chunk.content))
        now = self._clock.timestamp()
        try:
            with self._session_factory() as session, session.begin():
                rec = session.scalars(
                    select(ChunkRecord).where(
                        ChunkRecord.contenthash == chunk.contenthash,
                        ChunkRecord.moduleid == chunk.moduleid,
                    )
                ).first()
                if rec is None:
                    rec = ChunkRecord(
                        contenthash=chunk.contenthash,
                        moduleid=chunk.moduleid,
                        timecreated=now,
                    )
                    session.add(rec)
                rec.title = chunk.title
                rec.moduletype = chunk.moduletype
                rec.content = chunk.content
                rec.embedding = encode_embedding(chunk.embedding) if chunk.embedding else None
                rec.timemodified = now
                session.flush()
                return rec.id
        except SQLAlchemyError as ex:
            raise ChunkStoreError(f"upserting chunk failed: {ex}") from ex
