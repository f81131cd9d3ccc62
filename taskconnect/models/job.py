from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(BaseModel):
    """A worker's application, embedded in its Job document."""

    id: str
    worker: str
    applied_at: Optional[datetime] = None
    status: ApplicationStatus = ApplicationStatus.PENDING


class Job(BaseModel):
    # Poster-supplied fields (description, location, budget...) are kept as extras
    model_config = ConfigDict(extra="allow")

    id: str
    title: Optional[str] = None
    posted_by: Optional[str] = None
    created_at: Optional[datetime] = None
    applications: List[Application] = []

    def find_application(self, application_id: str) -> Optional[Application]:
        # Ids are hex strings; callers may send them in either case
        wanted = application_id.lower()
        return next((a for a in self.applications if a.id.lower() == wanted), None)

    def has_applicant(self, worker_id: str) -> bool:
        return any(a.worker == worker_id for a in self.applications)
