"""Port interface for the identity / staff directory."""

from abc import ABC, abstractmethod

from printroute.domain.entities.actor import Actor


class StaffDirectory(ABC):
    @abstractmethod
    async def resolve(self, user_id: str) -> Actor | None:
        """Return the actor for an authenticated user, or None if unknown."""
        ...
