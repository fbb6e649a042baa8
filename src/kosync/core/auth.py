"""Per-request credential check.

No session or token is issued: every protected request carries the
username and secret headers and is checked against the stored secret.
Malformed credentials are reported exactly like wrong ones.

Secrets are stored and compared in plain text.
"""

from __future__ import annotations

import structlog

from kosync.core.errors import StoreError, UnauthorizedError
from kosync.db.accounts_repository import get_secret
from kosync.db.store import KeyValueStore
from kosync.utils.validators import is_valid_field, is_valid_key_field

logger = structlog.get_logger(__name__)


async def authenticate(
    store: KeyValueStore,
    username: str | None,
    secret: str | None,
) -> str:
    """Validate a (username, secret) pair against the account store.

    Args:
        store: Key-value store
        username: Value of the username header, if sent
        secret: Value of the secret header, if sent

    Returns:
        The authenticated username

    Raises:
        UnauthorizedError: On missing, malformed or incorrect credentials,
            and when the stored secret cannot be fetched
    """
    if username is None or secret is None:
        raise UnauthorizedError("missing credentials")
    if not is_valid_key_field(username) or not is_valid_field(secret):
        raise UnauthorizedError("malformed credentials")

    try:
        stored = await get_secret(store, username)
    except StoreError as e:
        logger.warning("auth_store_error", username=username, error=e.detail)
        raise UnauthorizedError("secret lookup failed") from e

    if stored is None:
        logger.info("auth_rejected", username=username, reason="unknown_user")
        raise UnauthorizedError("unknown user")
    if stored != secret:
        logger.info("auth_rejected", username=username, reason="secret_mismatch")
        raise UnauthorizedError("secret mismatch")

    return username
