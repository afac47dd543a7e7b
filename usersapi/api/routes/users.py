"""CRUD endpoints for users. Every route requires a bearer token."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Request, status
from sqlalchemy.orm import Session

from usersapi.auth.dependencies import get_current_claims
from usersapi.database.database import get_db
from usersapi.database.user_repository import UserRepository
from usersapi.models.user import MAX_USER_ID, CreateUser, UpdateUser, User

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 30
MAX_PER_PAGE = 100
# Keeps (page - 1) * per_page within a 64-bit OFFSET
MAX_PAGE = 2**31 - 1

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_claims)],
)


def get_user_repository(request: Request, db: Session = Depends(get_db)) -> UserRepository:
    """Build a repository bound to this request's session and deadline."""
    return UserRepository(db, deadline=getattr(request.state, "deadline", None))


@router.get("", response_model=List[User])
def get_all_users(
    page: Optional[int] = Query(None, ge=1, le=MAX_PAGE),
    per_page: Optional[int] = Query(None, ge=1, le=MAX_PER_PAGE),
    repo: UserRepository = Depends(get_user_repository),
):
    """List users. Paginated only when `page` or `per_page` is given."""
    if page is None and per_page is None:
        return repo.list_all()

    page = page or DEFAULT_PAGE
    per_page = per_page or DEFAULT_PER_PAGE
    return repo.list_all(limit=per_page, offset=(page - 1) * per_page)


@router.get("/{user_id}", response_model=User)
def get_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    repo: UserRepository = Depends(get_user_repository),
):
    return repo.find_by_id(user_id)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(payload: CreateUser, repo: UserRepository = Depends(get_user_repository)):
    return repo.create(payload)


@router.put("/{user_id}", response_model=User)
def update_user(
    payload: UpdateUser,
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    repo: UserRepository = Depends(get_user_repository),
):
    """Partially update a user; fields missing from the body are left as they are."""
    return repo.update(user_id, payload)


@router.delete("/{user_id}")
def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    repo: UserRepository = Depends(get_user_repository),
):
    repo.delete(user_id)
    return {"message": "User deleted"}
