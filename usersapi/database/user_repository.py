"""Repository for User database operations."""

import logging
import time
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from usersapi.database.models import UserDB
from usersapi.errors import (
    ConflictError,
    CreateFailedError,
    NotFoundError,
    RequestTimeoutError,
    StoreError,
)
from usersapi.models.user import CreateUser, UpdateUser, User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations.

    Mutations re-read the row after committing and return the persisted state.
    Existence checks for update/delete lock the row in the same transaction as
    the write.

    Args:
        db: Session for the current request
        deadline: Optional `time.monotonic()` value after which nothing is
            committed; the transaction is rolled back instead.
    """

    def __init__(self, db: Session, deadline: Optional[float] = None):
        self.db = db
        self.deadline = deadline

    def _commit(self) -> None:
        if self.deadline is not None and time.monotonic() > self.deadline:
            self.db.rollback()
            logger.warning("Request deadline passed before commit; rolled back")
            raise RequestTimeoutError()
        self.db.commit()

    def _store_error(self, action: str, e: Exception) -> StoreError:
        self.db.rollback()
        logger.error(f"Failed to {action}: {type(e).__name__}: {str(e)}")
        return StoreError()

    def _get_for_update(self, user_id: int) -> Optional[UserDB]:
        return (
            self.db.query(UserDB)
            .filter(UserDB.id == user_id)
            .with_for_update()
            .first()
        )

    def list_all(self, limit: Optional[int] = None, offset: int = 0) -> List[User]:
        """Get all users ordered by id, optionally sliced."""
        try:
            query = self.db.query(UserDB).order_by(UserDB.id)
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return [user_db.to_pydantic() for user_db in query.all()]
        except SQLAlchemyError as e:
            raise self._store_error("list users", e) from e

    def find_by_id(self, user_id: int) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If no user has this id
        """
        try:
            user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        except SQLAlchemyError as e:
            raise self._store_error(f"load user {user_id}", e) from e
        if user_db is None:
            raise NotFoundError()
        return user_db.to_pydantic()

    def create(self, payload: CreateUser) -> User:
        """Insert a user and return the row as stored.

        Raises:
            CreateFailedError: If the inserted row cannot be read back
        """
        try:
            user_db = UserDB.from_create(payload)
            self.db.add(user_db)
            self.db.flush()
            inserted_id = user_db.id
            self._commit()
            logger.debug(f"Inserted user with id: {inserted_id}")

            created = self.db.query(UserDB).filter(UserDB.id == inserted_id).first()
        except SQLAlchemyError as e:
            raise self._store_error("create user", e) from e

        if created is None:
            logger.error(f"Failed to create user: id {inserted_id} not found after insert")
            raise CreateFailedError()
        return created.to_pydantic()

    def update(self, user_id: int, payload: UpdateUser) -> User:
        """Apply the fields supplied in `payload` and return the updated row.

        Raises:
            NotFoundError: If no user has this id (nothing is written)
            ConflictError: If the row disappeared before the write landed
        """
        try:
            user_db = self._get_for_update(user_id)
            if user_db is None:
                self.db.rollback()
                raise NotFoundError()

            for name, value in payload.supplied_fields().items():
                setattr(user_db, name, value)
            self._commit()
            logger.debug(f"Updated user {user_id}")
        except StaleDataError as e:
            self.db.rollback()
            logger.warning(f"Concurrent modification of user {user_id}: {str(e)}")
            raise ConflictError() from e
        except SQLAlchemyError as e:
            raise self._store_error(f"update user {user_id}", e) from e

        return self.find_by_id(user_id)

    def delete(self, user_id: int) -> None:
        """Hard-delete a user.

        Raises:
            NotFoundError: If no user has this id
            ConflictError: If the row disappeared before the delete landed
        """
        try:
            if self._get_for_update(user_id) is None:
                self.db.rollback()
                raise NotFoundError()

            result = self.db.execute(delete(UserDB).where(UserDB.id == user_id))
            if result.rowcount == 0:
                self.db.rollback()
                logger.warning(f"Concurrent modification of user {user_id}: already deleted")
                raise ConflictError()
            self._commit()
            logger.debug(f"Deleted user {user_id}")
        except SQLAlchemyError as e:
            raise self._store_error(f"delete user {user_id}", e) from e
