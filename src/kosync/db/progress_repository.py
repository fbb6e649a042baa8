"""Repository functions for progress records.

One hash per (user, document) at user:<username>:document:<document>.
"""

from __future__ import annotations

import structlog

from kosync.core.progress import ProgressRecord
from kosync.db.keys import progress_key
from kosync.db.store import KeyValueStore

logger = structlog.get_logger(__name__)


async def load_progress(
    store: KeyValueStore, username: str, document: str
) -> ProgressRecord:
    """Load the record for a document, or the zero record if never synced."""
    data = await store.hgetall(progress_key(username, document))
    if not data:
        logger.debug("progress.not_found", username=username, document=document)
        return ProgressRecord.empty()
    return ProgressRecord.from_mapping(data)


async def save_progress(
    store: KeyValueStore, username: str, record: ProgressRecord
) -> bool:
    """Overwrite all fields of the stored record in one write.

    Returns:
        False if the store reported the write was not applied

    Raises:
        StoreError: If the store call fails
    """
    key = progress_key(username, record.document)
    return await store.hset_mapping(key, record.to_mapping())
