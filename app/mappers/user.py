# File: app/mappers/user.py

from app.schemas.user import UserCreate


def to_user_record(payload: UserCreate, password_hash: str) -> dict:
    """
    Build the column values for a new User row.

    Every submitted field is passed through as-is except `password`, which
    is swapped for its hash. `payload` is not modified.
    """
    record = payload.model_dump()
    record["password"] = password_hash
    return record
