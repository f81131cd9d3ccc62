"""
MongoDB implementation of the job store.

Jobs live in the ``jobs`` collection with their applications embedded:

    {
        "_id": ObjectId,
        "title": "...", ...poster-supplied fields...,
        "posted_by": ObjectId,          # users._id
        "created_at": datetime,
        "applications": [
            {"_id": ObjectId, "worker": ObjectId, "applied_at": datetime, "status": "pending"}
        ]
    }
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from taskconnect.crud.base import JobStore
from taskconnect.exceptions import PersistenceError
from taskconnect.models.job import ApplicationStatus, Job

logger = logging.getLogger(__name__)


def to_object_id(value) -> Optional[ObjectId]:
    """Parse an id string, returning None when it can't be an ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if value is None or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def _id_str(value) -> Optional[str]:
    return str(value) if value is not None else None


def to_job(document: dict) -> Job:
    """Convert a raw ``jobs`` document into a Job with string ids."""
    data = dict(document)
    data["id"] = str(data.pop("_id"))
    data["posted_by"] = _id_str(data.get("posted_by"))
    data["applications"] = [
        {
            "id": str(app["_id"]),
            "worker": str(app["worker"]),
            "applied_at": app.get("applied_at"),
            "status": app.get("status", ApplicationStatus.PENDING.value),
        }
        for app in data.get("applications") or []
    ]
    return Job(**data)


@asynccontextmanager
async def store_errors(message: str):
    """Re-raise driver failures as PersistenceError with a generic message."""
    try:
        yield
    except PyMongoError as e:
        logger.exception(f"{message}: {e}")
        raise PersistenceError(message) from e


class MongoJobStore(JobStore):

    def __init__(self, db):
        self.collection = db.jobs

    async def insert(self, document: dict) -> Job:
        new_job = dict(document)
        # Keep the raw value if a poster id isn't an ObjectId
        new_job["posted_by"] = to_object_id(document["posted_by"]) or document["posted_by"]
        new_job["applications"] = []

        async with store_errors("Error posting job"):
            result = await self.collection.insert_one(new_job)

        new_job["_id"] = result.inserted_id
        return to_job(new_job)

    async def find_all(self) -> List[Job]:
        async with store_errors("Error fetching jobs"):
            jobs = await self.collection.find().to_list(length=None)
        return [to_job(job) for job in jobs]

    async def find_by_id(self, job_id: str) -> Optional[Job]:
        oid = to_object_id(job_id)
        if oid is None:
            return None

        async with store_errors("Error fetching job"):
            job = await self.collection.find_one({"_id": oid})
        return to_job(job) if job else None

    async def find_by_poster(self, poster_id: str) -> List[Job]:
        oid = to_object_id(poster_id)
        if oid is None:
            return []

        async with store_errors("Error fetching applications"):
            jobs = await self.collection.find({"posted_by": oid}).to_list(length=None)
        return [to_job(job) for job in jobs]

    async def find_by_worker(self, worker_id: str) -> List[Job]:
        oid = to_object_id(worker_id)
        if oid is None:
            return []

        async with store_errors("Error fetching applications"):
            jobs = await self.collection.find({"applications.worker": oid}).to_list(length=None)
        return [to_job(job) for job in jobs]

    async def find_by_application_id(self, application_id: str) -> Optional[Job]:
        oid = to_object_id(application_id)
        if oid is None:
            return None

        async with store_errors("Error fetching application"):
            job = await self.collection.find_one({"applications._id": oid})
        return to_job(job) if job else None

    async def append_application(self, job_id: str, worker_id: str, applied_at: datetime) -> Optional[str]:
        application = {
            "_id": ObjectId(),
            "worker": to_object_id(worker_id) or worker_id,
            "applied_at": applied_at,
            "status": ApplicationStatus.PENDING.value,
        }

        # The $ne guard makes the duplicate check and the push a single write
        async with store_errors("Error applying for job"):
            result = await self.collection.update_one(
                {"_id": to_object_id(job_id), "applications.worker": {"$ne": application["worker"]}},
                {"$push": {"applications": application}}
            )

        if result.modified_count != 1:
            return None
        return str(application["_id"])

    async def set_application_status(self, job_id: str, application_id: str, status: str) -> bool:
        async with store_errors("Error updating application"):
            result = await self.collection.update_one(
                {
                    "_id": to_object_id(job_id),
                    "applications": {
                        "$elemMatch": {
                            "_id": to_object_id(application_id),
                            "status": ApplicationStatus.PENDING.value,
                        }
                    },
                },
                {"$set": {"applications.$.status": status}}
            )
        return result.modified_count == 1
