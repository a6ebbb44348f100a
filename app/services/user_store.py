# File: app/services/user_store.py

"""
Persistence for User records.

All reads and writes of the users table go through `UserStore`. Database
exceptions never leave this module raw: constraint and column type
violations become InvalidParametersError, everything else a DatabaseError
with a generic message (the details go to the log).
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DatabaseError, InvalidParametersError, NotFoundError
from app.core.pagination import Page, PageParams, paginate
from app.models.user import User

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "The email provided is already in use"
DATABASE_UNAVAILABLE = "The database could not complete the request"


def _constraint_message(exc: IntegrityError) -> str:
    detail = str(exc.orig) if exc.orig is not None else str(exc)
    if "email" in detail.lower():
        return EMAIL_IN_USE
    return detail


def _data_message(exc: DataError) -> str:
    # First line only; drivers append the offending SQL below it
    lines = str(exc.orig).splitlines()
    return f"Invalid value: {lines[0]}" if lines else "Invalid value"


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def create_user(self, record: Dict[str, Any]) -> User:
        """
        Insert a new user and return it with id and timestamps loaded.

        Raises:
            InvalidParametersError: a constraint or column type rejected the row
            DatabaseError: the insert failed for any other reason
        """
        logger.info(f"Create user: {record.get('email')}")
        user = User(**record)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.error(f"User rejected by constraint: {exc.orig}")
            raise InvalidParametersError(_constraint_message(exc)) from exc
        except DataError as exc:
            self.db.rollback()
            logger.error(f"User rejected by column type: {exc.orig}")
            raise InvalidParametersError(_data_message(exc)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Failed to create user: {exc}")
            raise DatabaseError(DATABASE_UNAVAILABLE) from exc

        self.db.refresh(user)
        logger.info(f"Created user id={user.id}")
        return user

    def list_users(
        self,
        params: PageParams,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Page:
        """
        Return one page of users whose columns equal every value in
        `filters`, along with the total number of matches.
        """
        query = self.db.query(User).filter_by(**(filters or {})).order_by(User.id)
        try:
            return paginate(query, params)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to list users: {exc}")
            raise DatabaseError(DATABASE_UNAVAILABLE) from exc

    def get_user(self, user_id: int) -> User:
        try:
            user = self.db.get(User, user_id)
        except SQLAlchemyError as exc:
            logger.error(f"Failed to load user {user_id}: {exc}")
            raise DatabaseError(DATABASE_UNAVAILABLE) from exc

        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user
