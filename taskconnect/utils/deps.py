"""FastAPI dependencies wiring the Mongo stores into the lifecycle services."""

from fastapi import Depends

from taskconnect.crud import MongoJobStore, MongoUserStore
from taskconnect.database import get_db
from taskconnect.services.job_lifecycle import JobLifecycle


def get_job_store():
    return MongoJobStore(get_db())


def get_user_store():
    return MongoUserStore(get_db())


def get_lifecycle(
    jobs=Depends(get_job_store),
    users=Depends(get_user_store),
) -> JobLifecycle:
    return JobLifecycle(jobs, users)
