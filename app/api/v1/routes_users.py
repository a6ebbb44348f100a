# File: app/api/v1/routes_users.py

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from app.api.deps import get_page_params, get_user_filters, get_user_store
from app.core.pagination import PageParams
from app.core.security import hash_password
from app.mappers.user import to_user_record
from app.schemas.user import ErrorResponse, UserCreate, UserFilters, UserPage, UserRead
from app.services.user_store import UserStore

router = APIRouter()


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={400: {"model": ErrorResponse, "description": "Invalid parameters"}},
)
async def create_user(
    payload: UserCreate,
    store: UserStore = Depends(get_user_store),
):
    """
    Hash the password, persist the user and return it.

    A duplicate email or any other rejected field comes back as a 400 with
    `internal_code: invalid_params`.
    """
    password_hash = await hash_password(payload.password)
    record = to_user_record(payload, password_hash)
    return await run_in_threadpool(store.create_user, record)


@router.get(
    "",
    response_model=UserPage,
    summary="List users",
    responses={400: {"model": ErrorResponse, "description": "Invalid filters or pagination"}},
)
async def list_users(
    params: PageParams = Depends(get_page_params),
    filters: UserFilters = Depends(get_user_filters),
    store: UserStore = Depends(get_user_store),
):
    """
    Users matching every filter in the query string, one page at a time.
    `count` is the number of matches across all pages.
    """
    page = await run_in_threadpool(store.list_users, params, filters.criteria())
    return UserPage(
        users=[UserRead.model_validate(u) for u in page.items],
        count=page.count,
        page=page.page,
        limit=page.limit,
        total_pages=page.total_pages,
        previous_page=page.previous_page,
        next_page=page.next_page,
    )


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(
    user_id: int,
    store: UserStore = Depends(get_user_store),
):
    return await run_in_threadpool(store.get_user, user_id)
