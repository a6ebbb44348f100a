# File: tests/test_user_store.py

from datetime import date
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import DataError, OperationalError
from sqlalchemy.orm import Session

from app.core.errors import DatabaseError, InvalidParametersError, NotFoundError
from app.core.pagination import PageParams
from app.models.user import UserType
from app.services.user_store import DATABASE_UNAVAILABLE, EMAIL_IN_USE, UserStore


def make_record(**overrides) -> dict:
    record = {
        "name": "Tom Engels",
        "email": "tom.engels@records.io",
        "password": "$2b$04$notarealhashbutlongenoughtostore",
        "type": UserType.REGULAR,
        "birth_date": date(1996, 5, 4),
        "country": "Argentina",
        "state": "Buenos Aires",
        "city": "Lomas de Zamora",
        "address": "Calle Falsa 1234",
        "email_subscription": True,
        "number_of_languages": 5,
    }
    record.update(overrides)
    return record


def test_create_user_assigns_id_and_timestamps(db_session):
    store = UserStore(db_session)

    user = store.create_user(make_record())

    assert user.id is not None
    assert user.created_at is not None
    assert user.updated_at is not None
    assert user.birth_date == date(1996, 5, 4)
    assert user.type == UserType.REGULAR


def test_create_user_defaults_type(db_session):
    record = make_record()
    del record["type"]

    user = UserStore(db_session).create_user(record)

    assert user.type == UserType.REGULAR


def test_create_user_with_duplicate_email(db_session):
    store = UserStore(db_session)
    store.create_user(make_record())

    with pytest.raises(InvalidParametersError) as exc_info:
        store.create_user(make_record(name="Someone Else"))

    assert exc_info.value.message == EMAIL_IN_USE
    assert exc_info.value.internal_code == "invalid_params"


def test_session_usable_after_rejected_insert(db_session):
    store = UserStore(db_session)
    store.create_user(make_record())

    with pytest.raises(InvalidParametersError):
        store.create_user(make_record())

    other = store.create_user(make_record(email="other@records.io"))
    assert other.id is not None


def test_create_user_wraps_other_database_failures():
    db = Mock(spec=Session)
    db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

    with pytest.raises(DatabaseError) as exc_info:
        UserStore(db).create_user(make_record())

    db.rollback.assert_called_once()
    assert exc_info.value.message == DATABASE_UNAVAILABLE
    assert "INSERT" not in exc_info.value.message


def test_create_user_maps_out_of_range_values_to_invalid_params():
    db = Mock(spec=Session)
    db.commit.side_effect = DataError(
        "INSERT INTO users ...",
        {},
        Exception("value too long for type character varying(255)\nLINE 1: INSERT INTO users ..."),
    )

    with pytest.raises(InvalidParametersError) as exc_info:
        UserStore(db).create_user(make_record())

    db.rollback.assert_called_once()
    assert exc_info.value.message == "Invalid value: value too long for type character varying(255)"


def test_list_users_applies_filters_and_window(db_session):
    store = UserStore(db_session)
    for i in range(4):
        store.create_user(make_record(email=f"regular{i}@records.io"))
    for i in range(3):
        store.create_user(make_record(email=f"admin{i}@records.io", type=UserType.ADMIN))

    page = store.list_users(PageParams(page=1, limit=2), {"type": UserType.ADMIN})

    assert page.count == 3
    assert len(page.items) == 2
    assert all(u.type == UserType.ADMIN for u in page.items)
    assert page.next_page == 2


def test_list_users_without_filters_orders_by_id(db_session):
    store = UserStore(db_session)
    created = [store.create_user(make_record(email=f"u{i}@records.io")) for i in range(3)]

    page = store.list_users(PageParams(page=1, limit=10))

    assert [u.id for u in page.items] == [u.id for u in created]


def test_list_users_wraps_query_failures():
    db = Mock(spec=Session)
    db.query.return_value.filter_by.return_value.order_by.return_value.order_by.side_effect = (
        OperationalError("SELECT", {}, Exception("db down"))
    )

    with pytest.raises(DatabaseError) as exc_info:
        UserStore(db).list_users(PageParams())

    assert exc_info.value.internal_code == "database_error"
    assert exc_info.value.message == DATABASE_UNAVAILABLE


def test_get_user(db_session):
    store = UserStore(db_session)
    created = store.create_user(make_record())

    assert store.get_user(created.id).email == "tom.engels@records.io"


def test_get_missing_user(db_session):
    with pytest.raises(NotFoundError):
        UserStore(db_session).get_user(12345)
