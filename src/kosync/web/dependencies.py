"""Request dependencies shared by the routers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, Request

from kosync.core.sync_service import authorize_user
from kosync.db.store import KeyValueStore

USER_HEADER = "x-auth-user"
KEY_HEADER = "x-auth-key"


def get_store(request: Request) -> KeyValueStore:
    """Return the store attached to the application."""
    return request.app.state.store


StoreDep = Annotated[KeyValueStore, Depends(get_store)]


async def get_current_user(
    store: StoreDep,
    username: Annotated[str | None, Header(alias=USER_HEADER)] = None,
    secret: Annotated[str | None, Header(alias=KEY_HEADER)] = None,
) -> str:
    """Authenticate the request from its credential headers.

    Raises:
        UnauthorizedError: Handled by the application's error handler
    """
    return await authorize_user(store, username, secret)


CurrentUser = Annotated[str, Depends(get_current_user)]
