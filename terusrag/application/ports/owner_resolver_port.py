from typing import Protocol, runtime_checkable

from terusrag.domain.models import ContentOwner


@runtime_checkable
class OwnerResolverPort(Protocol):
    def resolve_owner(self, moduletype: str, moduleid: int) -> ContentOwner | None:
        """Display title and view URL of a content item, or None when it does not exist."""
        ...
