"""Repository functions for account credentials.

One string value per account at user:<username>:key holding the secret.
Secrets are stored as given: the sync protocol compares them verbatim.
"""

from __future__ import annotations

import structlog

from kosync.db.keys import account_key
from kosync.db.store import KeyValueStore

logger = structlog.get_logger(__name__)


async def account_exists(store: KeyValueStore, username: str) -> bool:
    """Check whether an account is registered under username."""
    return await store.exists(account_key(username))


async def create_account(store: KeyValueStore, username: str, secret: str) -> bool:
    """Register an account unless the username is taken.

    The write is a single set-if-absent, so an existing secret is never
    overwritten even when two creations race.

    Args:
        store: Key-value store
        username: Validated username
        secret: Validated secret

    Returns:
        True if the account was written, False otherwise

    Raises:
        StoreError: If the store call fails
    """
    created = await store.set_if_absent(account_key(username), secret)
    if created:
        logger.debug("accounts.inserted", username=username)
    return created


async def get_secret(store: KeyValueStore, username: str) -> str | None:
    """Get the stored secret for username, or None if no such account."""
    return await store.get(account_key(username))
