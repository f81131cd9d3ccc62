# ========================================
# taskconnect/routes/job.py
# ========================================

from fastapi import APIRouter, Depends, status
from typing import List

from taskconnect.models.user import Principal
from taskconnect.schemas.job import JobCreate, JobResponse, JobCreatedResponse
from taskconnect.schemas.application import (
    ApplicationSubmitted,
    PosterApplicationResponse,
    WorkerApplicationResponse,
    ApplicationStatusResponse
)
from taskconnect.services.job_lifecycle import JobLifecycle
from taskconnect.utils.auth import get_current_principal
from taskconnect.utils.deps import get_lifecycle

router = APIRouter(prefix="/jobs")

# Static paths are registered before /jobs/{job_id} so they aren't captured by it

# ===========================
# PROFESSIONAL BODY ENDPOINTS
# ===========================

# ✅ 1. VIEW APPLICATIONS TO MY JOBS
@router.get("/applications", response_model=List[PosterApplicationResponse])
async def get_applications(
    principal: Principal = Depends(get_current_principal),
    lifecycle: JobLifecycle = Depends(get_lifecycle)
):
    """All applications to the caller's job postings."""
    return await lifecycle.list_applications_for_poster(principal)


# ✅ 2. ACCEPT APPLICATION
@router.put("/applications/{application_id}/accept", response_model=ApplicationStatusResponse)
async def accept_application(
    application_id: str,
    principal: Principal = Depends(get_current_principal),
    lifecycle: JobLifecycle = Depends(get_lifecycle)
):
    return await lifecycle.accept_application(principal, application_id)


# ✅ 3. REJECT APPLICATION
@router.put("/applications/{application_id}/reject", response_model=ApplicationStatusResponse)
async def reject_application(
    application_id: str,
    principal: Principal = Depends(get_current_principal),
    lifecycle: JobLifecycle = Depends(get_lifecycle)
):
    return await lifecycle.reject_application(principal, application_id)


# ✅ 4. POST A JOB
@router.post("", status_code=status.HTTP_201_CREATED, response_model=JobCreatedResponse)
async def create_job(
    job: JobCreate,
    principal: Principal = Depends(get_current_principal),
    lifecycle: JobLifecycle = Depends(get_lifecycle)
):
    """Create a new job posting. Only professional bodies can post jobs."""
    new_job = await lifecycle.create_job(principal, job.model_dump(exclude_unset=True))
    return {"message": "Job posted successfully", "job": new_job.model_dump()}


# ===========================
# WORKER ENDPOINTS
# ===========================

# ✅ 5. MY APPLICATIONS
@router.get("/my-applications", response_model=List[WorkerApplicationResponse])
async def get_my_applications(
    principal: Principal = Depends(get_current_principal),
    lifecycle: JobLifecycle = Depends(get_lifecycle)
):
    return await lifecycle.list_applications_for_worker(principal)


# ✅ 6. APPLY FOR JOB
@router.post("/{job_id}/apply", response_model=ApplicationSubmitted)
async def apply_job(
    job_id: str,
    principal: Principal = Depends(get_current_principal),
    lifecycle: JobLifecycle = Depends(get_lifecycle)
):
    """Submit an application. Only workers can apply, once per job."""
    return await lifecycle.apply_to_job(principal, job_id)


# ===========================
# PUBLIC ENDPOINTS
# ===========================

# ✅ 7. GET ALL JOBS
@router.get("", response_model=List[JobResponse])
async def get_all_jobs(lifecycle: JobLifecycle = Depends(get_lifecycle)):
    """Every posted job, with the poster's name."""
    return await lifecycle.list_jobs()


# ✅ 8. GET SINGLE JOB
@router.get("/{job_id}", response_model=JobResponse)
async def get_job_details(job_id: str, lifecycle: JobLifecycle = Depends(get_lifecycle)):
    return await lifecycle.get_job(job_id)
