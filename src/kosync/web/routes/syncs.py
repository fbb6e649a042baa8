"""Progress sync endpoints."""

from fastapi import APIRouter

from kosync.core.sync_service import get_progress, update_progress
from kosync.web.dependencies import CurrentUser, StoreDep
from kosync.web.schemas import ProgressResponse, ProgressUpdate

router = APIRouter(prefix="/syncs", tags=["syncs"])


@router.api_route("/progress", methods=["PUT", "POST"], response_model=ProgressResponse)
async def update_progress_endpoint(
    payload: ProgressUpdate, username: CurrentUser, store: StoreDep
) -> ProgressResponse:
    """Store the reading position for a document.

    Returns the record as stored, with the server timestamp.
    """
    record = await update_progress(store, username, payload.to_record())
    return ProgressResponse.from_record(record)


@router.get("/progress/{document}", response_model=ProgressResponse)
async def get_progress_endpoint(
    document: str, username: CurrentUser, store: StoreDep
) -> ProgressResponse:
    """Get the last reading position for a document.

    Documents never synced return a zero-valued record.
    """
    record = await get_progress(store, username, document)
    return ProgressResponse.from_record(record)
