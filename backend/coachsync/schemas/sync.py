from datetime import datetime
from enum import Enum

from coachsync.schemas.base import CamelModel

class SyncEntityType(str, Enum):
    template = "template"
    plan = "plan"
    session = "session"
    client = "client"

class SyncAction(str, Enum):
    create = "create"
    update = "update"
    delete = "delete"

class SyncLedgerEntry(CamelModel):
    type: SyncEntityType
    id: str
    action: SyncAction
    timestamp: datetime

    def matches(self, entity_type: str, entity_id: str) -> bool:
        return self.type == entity_type and self.id == entity_id
