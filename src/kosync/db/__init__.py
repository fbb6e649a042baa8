"""Key-value store access for accounts and progress records."""

from kosync.db.keys import account_key, progress_key
from kosync.db.store import KeyValueStore, RedisStore

__all__ = [
    "KeyValueStore",
    "RedisStore",
    "account_key",
    "progress_key",
]
