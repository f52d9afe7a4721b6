from typing import Protocol, runtime_checkable

from terusrag.domain.models import Chunk


@runtime_checkable
class ChunkStorePort(Protocol):
    def load_corpus(self) -> list[Chunk]:
        """Full snapshot of all indexed chunks, in stable id order."""
        ...

    def get_chunk(self, chunk_id: int) -> Chunk | None: ...

    def upsert(self, chunk: Chunk) -> int:
        """Insert, or update the chunk with the same (contenthash, moduleid). Returns its id."""
        ...
