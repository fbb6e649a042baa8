"""Sync operations.

Each operation takes the store explicitly, validates its input before any
store mutation, and raises a SyncError subclass on failure. Store errors
are never retried.

Operations:
- create_user(store, username, secret) -> str
- authorize_user(store, username, secret) -> str
- update_progress(store, username, record) -> ProgressRecord
- get_progress(store, username, document) -> ProgressRecord
"""

from __future__ import annotations

import structlog

from kosync.core.auth import authenticate
from kosync.core.errors import InvalidFieldError, UserExistsError, UnknownSyncError
from kosync.core.progress import ProgressRecord
from kosync.db.accounts_repository import account_exists, create_account
from kosync.db.progress_repository import load_progress, save_progress
from kosync.db.store import KeyValueStore
from kosync.utils.validators import is_valid_field, is_valid_key_field

logger = structlog.get_logger(__name__)


async def create_user(store: KeyValueStore, username: str, secret: str) -> str:
    """Register a new account.

    Args:
        store: Key-value store
        username: Requested username (key field)
        secret: Authentication secret

    Returns:
        The created username

    Raises:
        InvalidFieldError: If username or password is invalid
        UserExistsError: If the username is taken
        UnknownSyncError: If the store did not apply the write
        StoreError: If a store call fails
    """
    if not is_valid_key_field(username):
        raise InvalidFieldError("username")
    if not is_valid_field(secret):
        raise InvalidFieldError("password")

    if await account_exists(store, username):
        raise UserExistsError(username)

    if not await create_account(store, username, secret):
        # Lost a race against a concurrent creation, or the write failed
        if await account_exists(store, username):
            raise UserExistsError(username)
        raise UnknownSyncError("could not create user")

    logger.info("user_created", username=username)
    return username


async def authorize_user(
    store: KeyValueStore, username: str | None, secret: str | None
) -> str:
    """Confirm credentials; see kosync.core.auth.authenticate."""
    return await authenticate(store, username, secret)


async def update_progress(
    store: KeyValueStore, username: str, record: ProgressRecord
) -> ProgressRecord:
    """Replace the stored record for record.document.

    The timestamp is always set to server time; a client-supplied value is
    discarded.

    Returns:
        The record as stored

    Raises:
        InvalidFieldError: First invalid field (document, percentage,
            progress, device)
        UnknownSyncError: If the store did not apply the write
        StoreError: If the store call fails
    """
    record.validate()
    stored = record.stamped()

    if not await save_progress(store, username, stored):
        raise UnknownSyncError("could not update progress")

    logger.info(
        "progress_updated",
        username=username,
        document=stored.document,
        percentage=stored.percentage,
        device=stored.device,
    )
    return stored


async def get_progress(
    store: KeyValueStore, username: str, document: str
) -> ProgressRecord:
    """Fetch the record for a document (zero record if never synced).

    Raises:
        InvalidFieldError: If document is not a valid key field
        StoreError: If the store call fails
    """
    if not is_valid_key_field(document):
        raise InvalidFieldError("document")
    return await load_progress(store, username, document)
