from typing import Literal
from pydantic import BaseModel

PROFESSIONAL_BODY = "professional-body"
WORKER = "worker"

Role = Literal["professional-body", "worker"]


class Principal(BaseModel):
    """An authenticated caller, as resolved from a bearer token."""

    id: str
    role: Role
