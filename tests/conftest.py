"""
Pytest configuration and fixtures.

The Mongo-backed stores are replaced by in-memory stores implementing the
same interfaces, both for the lifecycle unit tests and for the API tests
(via ``app.dependency_overrides``). No MongoDB server is needed.
"""

import copy
from datetime import datetime
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from taskconnect.crud.base import JobStore, UserStore
from taskconnect.exceptions import PersistenceError
from taskconnect.main import app
from taskconnect.models.job import Job
from taskconnect.models.user import PROFESSIONAL_BODY, WORKER, Principal
from taskconnect.services.job_lifecycle import JobLifecycle
from taskconnect.utils.auth import create_access_token
from taskconnect.utils.deps import get_job_store, get_user_store


def _new_id():
    return uuid4().hex[:24]


class InMemoryJobStore(JobStore):

    def __init__(self):
        self.jobs = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise PersistenceError("Database error")

    def _job(self, doc):
        return Job(**copy.deepcopy(doc))

    def add_job(self, title, posted_by, **fields):
        """Seed a job directly, bypassing the lifecycle."""
        job_id = _new_id()
        self.jobs[job_id] = dict(fields, id=job_id, title=title, posted_by=posted_by,
                                 created_at=datetime.utcnow(), applications=[])
        return job_id

    async def insert(self, document):
        self._check()
        job_id = _new_id()
        self.jobs[job_id] = dict(copy.deepcopy(document), id=job_id, applications=[])
        return self._job(self.jobs[job_id])

    async def find_all(self):
        self._check()
        return [self._job(doc) for doc in self.jobs.values()]

    async def find_by_id(self, job_id):
        self._check()
        doc = self.jobs.get(job_id)
        return self._job(doc) if doc else None

    async def find_by_poster(self, poster_id):
        self._check()
        return [self._job(doc) for doc in self.jobs.values() if doc["posted_by"] == poster_id]

    async def find_by_worker(self, worker_id):
        self._check()
        return [
            self._job(doc) for doc in self.jobs.values()
            if any(a["worker"] == worker_id for a in doc["applications"])
        ]

    async def find_by_application_id(self, application_id):
        self._check()
        for doc in self.jobs.values():
            # ObjectId parsing accepts hex in either case
            if any(a["id"] == application_id.lower() for a in doc["applications"]):
                return self._job(doc)
        return None

    async def append_application(self, job_id, worker_id, applied_at):
        self._check()
        doc = self.jobs.get(job_id)
        if doc is None or any(a["worker"] == worker_id for a in doc["applications"]):
            return None
        application_id = _new_id()
        doc["applications"].append({
            "id": application_id,
            "worker": worker_id,
            "applied_at": applied_at,
            "status": "pending",
        })
        return application_id

    async def set_application_status(self, job_id, application_id, status):
        self._check()
        for app in self.jobs[job_id]["applications"]:
            if app["id"] == application_id and app["status"] == "pending":
                app["status"] = status
                return True
        return False


class InMemoryUserStore(UserStore):

    def __init__(self):
        self.users = {}

    def add_user(self, name, role, email=None, category=None, password="not-a-hash"):
        user_id = _new_id()
        self.users[user_id] = {
            "id": user_id,
            "name": name,
            "email": email or f"{user_id}@example.com",
            "password": password,
            "role": role,
            "category": category,
        }
        return user_id

    async def create(self, document):
        user_id = _new_id()
        self.users[user_id] = dict(document, id=user_id)
        return user_id

    async def find_by_id(self, user_id):
        user = self.users.get(user_id)
        return dict(user) if user else None

    async def find_by_email(self, email):
        return next((dict(u) for u in self.users.values() if u["email"] == email), None)

    async def resolve_names(self, user_ids):
        return {uid: self.users[uid]["name"] for uid in user_ids if uid in self.users}

    async def resolve_workers(self, user_ids):
        return {
            uid: {k: self.users[uid].get(k) for k in ("name", "email", "category")}
            for uid in user_ids if uid in self.users
        }


@pytest.fixture
def job_store():
    return InMemoryJobStore()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def lifecycle(job_store, user_store):
    return JobLifecycle(job_store, user_store)


@pytest.fixture
def poster(user_store):
    user_id = user_store.add_user("City Builders Guild", PROFESSIONAL_BODY)
    return Principal(id=user_id, role=PROFESSIONAL_BODY)


@pytest.fixture
def other_poster(user_store):
    user_id = user_store.add_user("Harbour Trades Council", PROFESSIONAL_BODY)
    return Principal(id=user_id, role=PROFESSIONAL_BODY)


@pytest.fixture
def worker(user_store):
    user_id = user_store.add_user("Ada Mason", WORKER, email="ada@example.com", category="masonry")
    return Principal(id=user_id, role=WORKER)


@pytest.fixture
def other_worker(user_store):
    user_id = user_store.add_user("Ben Joiner", WORKER, email="ben@example.com", category="carpentry")
    return Principal(id=user_id, role=WORKER)


@pytest.fixture
def client(job_store, user_store):
    """API test client backed by the in-memory stores."""
    app.dependency_overrides[get_job_store] = lambda: job_store
    app.dependency_overrides[get_user_store] = lambda: user_store

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a principal."""
    def _headers(principal):
        token = create_access_token({"sub": principal.id, "role": principal.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers
