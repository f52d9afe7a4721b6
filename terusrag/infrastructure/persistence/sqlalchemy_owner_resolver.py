from __future__ import annotations

from urllib.parse import urlencode

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from terusrag.application.ports.owner_resolver_port import OwnerResolverPort
from terusrag.domain.errors import ChunkStoreError
from terusrag.domain.models import ContentOwner
from terusrag.infrastructure.persistence.tables import ContentItemRecord


def view_url(site_url: str, moduletype: str, moduleid: int) -> str:
    """Moodle-style view URL: courses under /course, activities under /mod/<type>."""
    path = "/course/view.php" if moduletype == "course" else f"/mod/{moduletype}/view.php"
    return f"{site_url.rstrip('/')}{path}?{urlencode({'id': moduleid})}"


class SqlAlchemyOwnerResolver(OwnerResolverPort):
    """Resolves chunk owners from the content item table. Hidden items do not resolve."""

    def __init__(self, session_factory: sessionmaker[Session], site_url: str) -> None:
        self._session_factory = session_factory
        self._site_url = site_url

    def resolve_owner(self, moduletype: str, moduleid: int) -> ContentOwner | None:
        try:
            with self._session_factory() as session:
                rec = session.get(ContentItemRecord, (moduletype, moduleid))
        except SQLAlchemyError as ex:
            raise ChunkStoreError(f"resolving {moduletype} {moduleid} failed: {ex}") from ex
        if rec is None or not rec.visible:
            return None
        return ContentOwner(
            title=rec.title, view_url=view_url(self._site_url, moduletype, moduleid)
        )
