"""Authentication endpoints. Tokens are issued by the identity provider."""

from fastapi import APIRouter, Depends

from charity_api.core.dependencies import get_current_user
from charity_api.models.user import User
from charity_api.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
