"""
Record providers

The identity/billing store is an external collaborator. The API and the
watcher only need "give me this user's access fields", so they depend on the
RecordProvider protocol and get a concrete provider injected at construction.
"""

import threading
from typing import Dict, Optional, Protocol, Union, Any

from access.models import UserAccessRecord


class RecordProvider(Protocol):
    """Read-only source of user access records"""

    def get_record(self, user_id: str) -> Optional[UserAccessRecord]:
        ...


class InMemoryRecordProvider:
    """Dict-backed provider for local development and tests"""

    def __init__(self, records: Optional[Dict[str, Union[UserAccessRecord, Dict[str, Any]]]] = None):
        self._records: Dict[str, UserAccessRecord] = {}
        self._lock = threading.Lock()
        for user_id, record in (records or {}).items():
            self.put(user_id, record)

    def put(self, user_id: str, record: Union[UserAccessRecord, Dict[str, Any]]) -> UserAccessRecord:
        """Insert or replace a user's record (plain dict rows are accepted)"""
        if isinstance(record, dict):
            record = UserAccessRecord.from_dict({**record, 'user_id': user_id})
        with self._lock:
            self._records[str(user_id)] = record
        return record

    def remove(self, user_id: str) -> bool:
        with self._lock:
            return self._records.pop(str(user_id), None) is not None

    def get_record(self, user_id: str) -> Optional[UserAccessRecord]:
        with self._lock:
            return self._records.get(str(user_id))

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
