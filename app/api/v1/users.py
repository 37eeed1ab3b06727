"""User endpoints: open registration and reads, self-only update and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.core.errors import ForbiddenError
from app.schemas.auth import CurrentUser
from app.schemas.users import UserCreate, UserPublic, UserUpdate
from app.services import users as users_service

router = APIRouter()


def _require_self(db: Session, user_id: str, current_user: CurrentUser) -> None:
    """The target must exist (400/404 first); only then is it compared with the caller."""
    target = users_service.get_user(db, user_id)
    if target.id != current_user.id:
        raise ForbiddenError("You can only modify your own account")


@router.post("", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
) -> UserPublic:
    """Register a new user. Username and email must both be unused."""
    return users_service.create_user(db, body.username, body.email, body.password)


@router.get("", response_model=list[UserPublic])
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[UserPublic]:
    return users_service.list_users(db)


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: str, db: Annotated[Session, Depends(get_db)]) -> UserPublic:
    return users_service.get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserPublic)
def update_user(
    user_id: str,
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserPublic:
    """Update any subset of username, email and password on the caller's own account."""
    _require_self(db, user_id, current_user)
    return users_service.update_user(db, user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    """Delete the caller's own account and every post it owns."""
    _require_self(db, user_id, current_user)
    users_service.delete_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
