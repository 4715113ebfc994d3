from fastapi import APIRouter, Depends
from forum.api import deps
from forum.core.errors import UnauthenticatedError
from forum.models.user import User
from forum.schemas.user import UserRead

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/me", response_model=UserRead, summary="Get current user")
async def get_current_user_route(current_user: User | None = Depends(deps.get_current_user)):
    if not current_user:
        raise UnauthenticatedError()
    return current_user  # type: ignore
