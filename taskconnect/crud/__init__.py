"""
Persistence layer.

The lifecycle services only talk to the ``JobStore`` and ``UserStore``
interfaces; the Mongo implementations live next to them.
"""

from taskconnect.crud.base import JobStore, UserStore
from taskconnect.crud.jobs import MongoJobStore
from taskconnect.crud.users import MongoUserStore

__all__ = ["JobStore", "UserStore", "MongoJobStore", "MongoUserStore"]
