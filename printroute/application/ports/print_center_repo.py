"""Port interface for the print center registry."""

from abc import ABC, abstractmethod

from printroute.domain.entities.print_center import PrintCenter


class PrintCenterRepository(ABC):
    @abstractmethod
    async def get_by_id(self, center_id: int) -> PrintCenter | None:
        ...

    @abstractmethod
    async def list_eligible(self) -> list[PrintCenter]:
        """Active centers only, in a stable order (created_at, id)."""
        ...
