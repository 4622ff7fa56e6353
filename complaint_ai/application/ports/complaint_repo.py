"""Port interface for complaint persistence."""

from abc import ABC, abstractmethod

from complaint_ai.domain.entities.ai_analysis import AIAnalysis
from complaint_ai.domain.entities.complaint import Complaint


class ComplaintRepository(ABC):
    @abstractmethod
    async def save(self, complaint: Complaint) -> Complaint:
        """Insert a new complaint, assigning its generated id."""
        ...

    @abstractmethod
    async def get_by_id(self, complaint_id: str) -> Complaint | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Complaint]:
        ...

    @abstractmethod
    async def get_unanalyzed(self) -> list[Complaint]:
        """Return complaints that don't have an AI analysis yet."""
        ...

    @abstractmethod
    async def save_analysis(self, complaint_id: str, analysis: AIAnalysis) -> bool:
        """Attach ``analysis`` only if the complaint has no valid analysis yet.

        Returns False when another writer got there first (nothing written).
        """
        ...
