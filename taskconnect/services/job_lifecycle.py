"""
Job and application lifecycle.

Business rules for posting jobs, applying to them and deciding applications.
Nothing here knows about HTTP or MongoDB: callers pass an authenticated
``Principal`` and get back plain data, or a ``LifecycleError`` subclass.

Application states:

    pending --accept--> accepted
    pending --reject--> rejected

``accepted`` and ``rejected`` are terminal.
"""

from datetime import datetime
from typing import Dict, List

from taskconnect.crud.base import JobStore, UserStore
from taskconnect.exceptions import AlreadyApplied, InvalidTransition, NotFound
from taskconnect.logging_config import logged_operation
from taskconnect.models.job import ApplicationStatus, Job
from taskconnect.models.user import PROFESSIONAL_BODY, WORKER, Principal
from taskconnect.utils.permissions import authorize

UNKNOWN = "Unknown"

# Managed by the lifecycle, never taken from a poster's payload
RESERVED_FIELDS = {"_id", "id", "posted_by", "applications", "created_at"}


class JobLifecycle:

    def __init__(self, jobs: JobStore, users: UserStore):
        self.jobs = jobs
        self.users = users

    # ===========================
    # PUBLIC
    # ===========================

    @logged_operation("list_jobs")
    async def list_jobs(self) -> List[dict]:
        jobs = await self.jobs.find_all()
        names = await self._poster_names(jobs)
        return [self._public_view(job, names) for job in jobs]

    @logged_operation("get_job")
    async def get_job(self, job_id: str) -> dict:
        job = await self.jobs.find_by_id(job_id)
        if job is None:
            raise NotFound("Job not found")

        names = await self._poster_names([job])
        return self._public_view(job, names)

    # ===========================
    # PROFESSIONAL BODY
    # ===========================

    @logged_operation("create_job")
    async def create_job(self, principal: Principal, payload: dict) -> Job:
        authorize(principal, PROFESSIONAL_BODY)

        document = {k: v for k, v in payload.items() if k not in RESERVED_FIELDS}
        document["posted_by"] = principal.id
        document["created_at"] = datetime.utcnow()
        document["applications"] = []

        return await self.jobs.insert(document)

    @logged_operation("list_applications_for_poster")
    async def list_applications_for_poster(self, principal: Principal) -> List[dict]:
        """Every application to the principal's jobs, in job then application order."""
        authorize(principal, PROFESSIONAL_BODY)

        jobs = await self.jobs.find_by_poster(principal.id)
        worker_ids = {app.worker for job in jobs for app in job.applications}
        workers = await self.users.resolve_workers(worker_ids) if worker_ids else {}

        return [
            {
                "application_id": app.id,
                "job_id": job.id,
                "job_title": job.title,
                "worker": self._worker_view(app.worker, workers),
                "applied_at": app.applied_at,
                "status": app.status.value,
            }
            for job in jobs
            for app in job.applications
        ]

    @logged_operation("set_application_status")
    async def set_application_status(self, principal: Principal, application_id: str, new_status) -> dict:
        try:
            new_status = ApplicationStatus(new_status)
        except ValueError:
            raise InvalidTransition(f"Unknown application status: {new_status}")
        if new_status == ApplicationStatus.PENDING:
            raise InvalidTransition("Applications can only be accepted or rejected")

        job = await self.jobs.find_by_application_id(application_id)
        if job is None:
            raise NotFound("Application not found")

        authorize(principal, PROFESSIONAL_BODY, owner_id=job.posted_by)

        application = job.find_application(application_id)
        if application is None:
            raise NotFound("Application not found")
        if application.status != ApplicationStatus.PENDING:
            raise InvalidTransition(f"Application has already been {application.status.value}")

        updated = await self.jobs.set_application_status(job.id, application.id, new_status.value)
        if not updated:
            # Decided by a concurrent request between our read and write
            raise InvalidTransition()

        return {
            "message": f"Application {new_status.value}",
            "application_id": application.id,
            "status": new_status.value,
        }

    async def accept_application(self, principal: Principal, application_id: str) -> dict:
        return await self.set_application_status(principal, application_id, ApplicationStatus.ACCEPTED)

    async def reject_application(self, principal: Principal, application_id: str) -> dict:
        return await self.set_application_status(principal, application_id, ApplicationStatus.REJECTED)

    # ===========================
    # WORKER
    # ===========================

    @logged_operation("apply_to_job")
    async def apply_to_job(self, principal: Principal, job_id: str) -> dict:
        authorize(principal, WORKER)

        job = await self.jobs.find_by_id(job_id)
        if job is None:
            raise NotFound("Job not found")

        if job.has_applicant(principal.id):
            raise AlreadyApplied()

        application_id = await self.jobs.append_application(job.id, principal.id, datetime.utcnow())
        if application_id is None:
            # Lost the race against a concurrent application from the same worker
            raise AlreadyApplied()

        return {"message": "Application submitted successfully", "application_id": application_id}

    @logged_operation("list_applications_for_worker")
    async def list_applications_for_worker(self, principal: Principal) -> List[dict]:
        authorize(principal, WORKER)

        jobs = await self.jobs.find_by_worker(principal.id)
        return [
            {
                "application_id": app.id,
                "job_id": job.id,
                "job_title": job.title,
                "applied_at": app.applied_at,
                "status": app.status.value,
            }
            for job in jobs
            for app in job.applications
            if app.worker == principal.id
        ]

    # ===========================
    # HELPERS
    # ===========================

    async def _poster_names(self, jobs: List[Job]) -> Dict[str, str]:
        poster_ids = {job.posted_by for job in jobs if job.posted_by}
        if not poster_ids:
            return {}
        return await self.users.resolve_names(poster_ids)

    @staticmethod
    def _public_view(job: Job, names: Dict[str, str]) -> dict:
        view = job.model_dump(exclude={"applications"})
        view["posted_by"] = {
            "id": job.posted_by,
            "name": names.get(job.posted_by) or UNKNOWN,
        }
        view["application_count"] = len(job.applications)
        return view

    @staticmethod
    def _worker_view(worker_id: str, workers: Dict[str, dict]) -> dict:
        info = workers.get(worker_id, {})
        return {
            "id": worker_id,
            "name": info.get("name") or UNKNOWN,
            "email": info.get("email"),
            "category": info.get("category"),
        }
