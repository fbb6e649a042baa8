"""Account endpoints."""

from fastapi import APIRouter, status

from kosync.core.sync_service import create_user
from kosync.web.dependencies import CurrentUser, StoreDep
from kosync.web.schemas import AuthResponse, CreateUserRequest, CreateUserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "/create",
    response_model=CreateUserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user_endpoint(
    request: CreateUserRequest, store: StoreDep
) -> CreateUserResponse:
    """Register a new account."""
    username = await create_user(store, request.username, request.password)
    return CreateUserResponse(username=username)


@router.get("/auth", response_model=AuthResponse)
async def auth_user(username: CurrentUser) -> AuthResponse:
    """Confirm the credential headers are valid."""
    return AuthResponse()
