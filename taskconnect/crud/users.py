from datetime import datetime
from typing import Dict, Iterable, Optional

from pymongo.errors import DuplicateKeyError

from taskconnect.crud.base import UserStore
from taskconnect.crud.jobs import store_errors, to_object_id
from taskconnect.exceptions import DuplicateAccount


def _with_id(user: dict) -> dict:
    user = dict(user)
    user["id"] = str(user.pop("_id"))
    return user


class MongoUserStore(UserStore):

    def __init__(self, db):
        self.collection = db.users

    async def create(self, document: dict) -> str:
        new_user = dict(document)
        new_user.setdefault("created_at", datetime.utcnow())

        async with store_errors("Error creating user"):
            try:
                result = await self.collection.insert_one(new_user)
            except DuplicateKeyError as e:
                # Unique index on email; another registration got there first
                raise DuplicateAccount() from e
        return str(result.inserted_id)

    async def find_by_id(self, user_id: str) -> Optional[dict]:
        oid = to_object_id(user_id)
        if oid is None:
            return None

        async with store_errors("Error fetching user"):
            user = await self.collection.find_one({"_id": oid})
        return _with_id(user) if user else None

    async def find_by_email(self, email: str) -> Optional[dict]:
        async with store_errors("Error fetching user"):
            user = await self.collection.find_one({"email": email})
        return _with_id(user) if user else None

    async def _find_many(self, user_ids: Iterable[str], projection: dict) -> list:
        oids = [oid for oid in (to_object_id(u) for u in set(user_ids)) if oid is not None]
        if not oids:
            return []

        async with store_errors("Error fetching users"):
            return await self.collection.find({"_id": {"$in": oids}}, projection).to_list(length=None)

    async def resolve_names(self, user_ids: Iterable[str]) -> Dict[str, str]:
        users = await self._find_many(user_ids, {"name": 1})
        return {str(u["_id"]): u["name"] for u in users if u.get("name")}

    async def resolve_workers(self, user_ids: Iterable[str]) -> Dict[str, dict]:
        users = await self._find_many(user_ids, {"name": 1, "email": 1, "category": 1})
        return {
            str(u["_id"]): {
                "name": u.get("name"),
                "email": u.get("email"),
                "category": u.get("category"),
            }
            for u in users
        }
