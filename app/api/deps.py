# File: app/api/deps.py

from collections.abc import Generator
from datetime import date
from typing import Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from app.core.errors import InvalidParametersError
from app.core.pagination import PageParams, resolve_page_params
from app.db.session import SessionLocal
from app.models.user import UserType
from app.schemas.user import MAX_INT, UserFilters
from app.services.user_store import UserStore

PAGINATION_KEYS = {"page", "limit"}


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_page_params(
    page: Optional[int] = Query(None, ge=1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    page_header: Optional[int] = Header(None, alias="page", ge=1),
    limit_header: Optional[int] = Header(None, alias="limit", ge=1),
) -> PageParams:
    """
    Pagination controls may arrive as query parameters or as `page` /
    `limit` request headers. The query string wins when both are sent.
    """
    return resolve_page_params(
        page if page is not None else page_header,
        limit if limit is not None else limit_header,
    )


def get_user_filters(
    request: Request,
    name: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    type: Optional[UserType] = Query(None),
    birth_date: Optional[date] = Query(None),
    country: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    address: Optional[str] = Query(None),
    email_subscription: Optional[bool] = Query(None),
    number_of_languages: Optional[int] = Query(None, le=MAX_INT),
) -> UserFilters:
    """
    Exact-match filters for the user listing. Query keys outside the
    declared filters and pagination controls are rejected.
    """
    unknown = sorted(set(request.query_params) - set(UserFilters.model_fields) - PAGINATION_KEYS)
    if unknown:
        raise InvalidParametersError(f"Invalid filters: {', '.join(unknown)}")

    return UserFilters(
        name=name,
        email=email,
        type=type,
        birth_date=birth_date,
        country=country,
        state=state,
        city=city,
        address=address,
        email_subscription=email_subscription,
        number_of_languages=number_of_languages,
    )
