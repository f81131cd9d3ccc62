# ========================================
# taskconnect/schemas/job.py
# ========================================

from pydantic import BaseModel, ConfigDict
from typing import Optional, Union
from datetime import datetime

# 1. Input: What the professional body sends
class JobCreate(BaseModel):
    # Any other descriptive fields are stored as-is
    model_config = ConfigDict(extra="allow")

    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    budget: Optional[Union[float, str]] = None

# 2. Output: Poster reference, resolved to a display name
class PosterInfo(BaseModel):
    id: Optional[str] = None
    name: str

# 3. Output: Public job listing entry
class JobResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    title: Optional[str] = None
    posted_by: PosterInfo
    created_at: Optional[datetime] = None
    application_count: int = 0

# 4. Output: Freshly posted job
class JobCreatedResponse(BaseModel):
    message: str
    job: dict
