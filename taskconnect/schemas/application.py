# ========================================
# taskconnect/schemas/application.py
# ========================================

from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

# 1. Output: Apply acknowledgement
class ApplicationSubmitted(BaseModel):
    message: str
    application_id: str

# 2. Output: Applicant details shown to the poster
class WorkerInfo(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    category: Optional[str] = None

# 3. Output: One application to one of the poster's jobs
class PosterApplicationResponse(BaseModel):
    application_id: str
    job_id: str
    job_title: Optional[str] = None
    worker: WorkerInfo
    applied_at: Optional[datetime] = None
    status: Literal["pending", "accepted", "rejected"]

# 4. Output: One of the worker's own applications
class WorkerApplicationResponse(BaseModel):
    application_id: str
    job_id: str
    job_title: Optional[str] = None
    applied_at: Optional[datetime] = None
    status: Literal["pending", "accepted", "rejected"]

# 5. Output: Accept / reject acknowledgement
class ApplicationStatusResponse(BaseModel):
    message: str
    application_id: str
    status: Literal["accepted", "rejected"]
