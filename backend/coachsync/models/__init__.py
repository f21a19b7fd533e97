from coachsync.models.kv_entry import KVEntry
from coachsync.models.profile import Profile, UserRole

__all__ = ["KVEntry", "Profile", "UserRole"]
