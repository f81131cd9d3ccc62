"""
Store interfaces used by the lifecycle services.

Identifiers cross this boundary as strings. Implementations translate them
to whatever the backing database uses and return ``None`` (or an empty
result) for identifiers that cannot exist, rather than raising.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from taskconnect.models.job import Job


class JobStore(ABC):

    @abstractmethod
    async def insert(self, document: dict) -> Job:
        """Persist a new job document and return it with its generated id."""

    @abstractmethod
    async def find_all(self) -> List[Job]:
        ...

    @abstractmethod
    async def find_by_id(self, job_id: str) -> Optional[Job]:
        ...

    @abstractmethod
    async def find_by_poster(self, poster_id: str) -> List[Job]:
        ...

    @abstractmethod
    async def find_by_worker(self, worker_id: str) -> List[Job]:
        """Jobs holding an application from ``worker_id``."""

    @abstractmethod
    async def find_by_application_id(self, application_id: str) -> Optional[Job]:
        ...

    @abstractmethod
    async def append_application(self, job_id: str, worker_id: str, applied_at: datetime) -> Optional[str]:
        """
        Append a pending application unless ``worker_id`` already applied.

        The duplicate check and the append happen in one write. Returns the
        new application id, or ``None`` when nothing was appended.
        """

    @abstractmethod
    async def set_application_status(self, job_id: str, application_id: str, status: str) -> bool:
        """
        Move a pending application to ``status`` in one write.

        Returns ``False`` when the application was no longer pending.
        """


class UserStore(ABC):

    @abstractmethod
    async def create(self, document: dict) -> str:
        ...

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[dict]:
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[dict]:
        ...

    @abstractmethod
    async def resolve_names(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """Map each resolvable id to the user's display name."""

    @abstractmethod
    async def resolve_workers(self, user_ids: Iterable[str]) -> Dict[str, dict]:
        """Map each resolvable id to ``{name, email, category}``."""
