"""Tests for the users table and data access operations."""

import asyncio
from datetime import datetime
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import QueuePool

from users_api.core.exceptions import AddingUserError, DatabaseError, UserNotFoundError
from users_api.core.workers import run_blocking
from users_api.database import build_engine
from users_api.models import metadata
from users_api.models.users import users
from users_api.schemas.users import UserCreate, UserUpdate
from users_api.services.user_service import UserService


def test_create_user(user_service, sample_user_data):
    """Test creating a user assigns identity fields."""
    before = datetime.now()
    created = user_service.create_user(UserCreate(**sample_user_data))

    assert len(created) == 1
    user = created[0]
    assert user["first_name"] == "John"
    assert user["last_name"] == "Doe"
    assert user["email"] == "j@x.com"
    assert isinstance(user["user_id"], UUID)
    assert isinstance(user["id"], int)
    assert user["created_at"].tzinfo is None
    assert user["created_at"] >= before.replace(microsecond=0)


def test_create_then_fetch_by_user_id(user_service, sample_user_data):
    """Test inserting then fetching by the returned external id."""
    created = user_service.create_user(UserCreate(**sample_user_data))[0]

    fetched = user_service.get_users_by_user_id(created["user_id"])

    assert len(fetched) == 1
    assert fetched[0]["first_name"] == sample_user_data["first_name"]
    assert fetched[0]["last_name"] == sample_user_data["last_name"]
    assert fetched[0]["email"] == sample_user_data["email"]


def test_create_returns_own_row_not_latest(user_service, db_engine):
    """Test the created row is returned even when it is not the newest one."""
    first = user_service.create_user(
        UserCreate(first_name="Ada", last_name="Lovelace", email="ada@x.com")
    )[0]
    second = user_service.create_user(
        UserCreate(first_name="Alan", last_name="Turing", email="alan@x.com")
    )[0]

    assert first["user_id"] != second["user_id"]
    assert second["id"] > first["id"]


def test_external_ids_are_unique(user_service):
    """Test that repeated inserts never collide on the external id."""
    for i in range(20):
        user_service.create_user(
            UserCreate(first_name=f"User{i}", last_name="Test", email=f"user{i}@x.com")
        )

    all_users = user_service.list_users()
    assert len({user["user_id"] for user in all_users}) == 20


def test_unique_user_id_constraint(db_engine):
    """Test that the table rejects a duplicate external id."""
    shared_id = uuid4()
    row = {
        "user_id": shared_id,
        "first_name": "A",
        "last_name": "B",
        "created_at": datetime.now(),
    }

    with db_engine.begin() as conn:
        conn.execute(insert(users).values(email="a@x.com", **row))

    with pytest.raises(IntegrityError):
        with db_engine.begin() as conn:
            conn.execute(insert(users).values(email="b@x.com", **row))


def test_duplicate_email_is_database_error(user_service, sample_user_data):
    """Test a unique violation surfaces as a wrapped database error."""
    user_service.create_user(UserCreate(**sample_user_data))

    with pytest.raises(DatabaseError) as exc_info:
        user_service.create_user(UserCreate(**sample_user_data))

    assert exc_info.value.status_code == 500
    assert exc_info.value.message.startswith("Database error: ")
    assert len(user_service.list_users()) == 1


def test_list_users_ordered_by_id(user_service):
    """Test listing returns every row in insertion order."""
    emails = ["c@x.com", "a@x.com", "b@x.com"]
    for email in emails:
        user_service.create_user(UserCreate(first_name="F", last_name="L", email=email))

    listed = user_service.list_users()

    assert [user["email"] for user in listed] == emails


def test_list_users_empty(user_service):
    assert user_service.list_users() == []


def test_get_unknown_user_id_returns_empty(user_service):
    assert user_service.get_users_by_user_id(uuid4()) == []


def test_update_user_overwrites_present_fields(user_service, sample_user_data):
    """Test updating only the fields that were sent."""
    created = user_service.create_user(UserCreate(**sample_user_data))[0]

    updated = user_service.update_user(created["user_id"], UserUpdate(first_name="Jane"))

    assert len(updated) == 1
    assert updated[0]["user_id"] == created["user_id"]
    assert updated[0]["first_name"] == "Jane"
    assert updated[0]["last_name"] == "Doe"
    assert updated[0]["email"] == "j@x.com"
    assert updated[0]["created_at"] == created["created_at"]


def test_update_with_no_fields_leaves_user_unchanged(user_service, sample_user_data):
    """Test an empty patch never blanks existing values."""
    created = user_service.create_user(UserCreate(**sample_user_data))[0]

    updated = user_service.update_user(created["user_id"], UserUpdate())

    assert updated == [created]
    assert user_service.get_users_by_user_id(created["user_id"]) == [created]


def test_update_returns_updated_row_not_latest(user_service, sample_user_data):
    """Test update returns the affected row even when newer rows exist."""
    target = user_service.create_user(UserCreate(**sample_user_data))[0]
    user_service.create_user(UserCreate(first_name="New", last_name="Er", email="new@x.com"))

    updated = user_service.update_user(target["user_id"], UserUpdate(last_name="Smith"))

    assert updated[0]["user_id"] == target["user_id"]
    assert updated[0]["last_name"] == "Smith"


def test_update_unknown_user(user_service):
    with pytest.raises(UserNotFoundError):
        user_service.update_user(uuid4(), UserUpdate(first_name="Ghost"))

    with pytest.raises(UserNotFoundError):
        user_service.update_user(uuid4(), UserUpdate())


def test_delete_user(user_service, sample_user_data, db_engine):
    """Test deleting removes exactly one row."""
    target = user_service.create_user(UserCreate(**sample_user_data))[0]
    other = user_service.create_user(
        UserCreate(first_name="Keep", last_name="Me", email="keep@x.com")
    )[0]

    deleted = user_service.delete_user(target["user_id"])

    assert deleted == [target]
    assert user_service.get_users_by_user_id(target["user_id"]) == []
    assert user_service.list_users() == [other]


def test_delete_unknown_user(user_service):
    with pytest.raises(UserNotFoundError):
        user_service.delete_user(uuid4())


def test_internal_id_not_reused_after_delete(user_service, db_engine):
    """Test the internal sequence keeps growing after the newest row is removed."""
    first = user_service.create_user(UserCreate(first_name="A", last_name="A", email="a@x.com"))[0]
    user_service.delete_user(first["user_id"])

    second = user_service.create_user(UserCreate(first_name="B", last_name="B", email="b@x.com"))[0]

    assert second["id"] > first["id"]
    with db_engine.connect() as conn:
        ids = conn.execute(select(users.c.id)).scalars().all()
    assert ids == [second["id"]]


def test_check_connection(user_service):
    assert user_service.check_connection() is True


# ============================================================================
# Pool and concurrency
# ============================================================================


def test_connection_released_after_failed_operation(tmp_path):
    """Test a failing operation hands its connection back to a one-slot pool."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'users.db'}",
        poolclass=QueuePool,
        pool_size=1,
        max_overflow=0,
        pool_timeout=1,
        connect_args={"check_same_thread": False},
    )
    metadata.create_all(engine)
    service = UserService(engine)
    payload = UserCreate(first_name="John", last_name="Doe", email="j@x.com")
    service.create_user(payload)

    for _ in range(3):
        with pytest.raises(DatabaseError):
            service.create_user(payload)

    assert engine.pool.checkedout() == 0
    assert len(service.list_users()) == 1
    engine.dispose()


@pytest.mark.parametrize("in_memory", [True, False])
async def test_concurrent_creates_are_all_kept(tmp_path, in_memory):
    """Test parallel inserts through the worker pool each commit their own row."""
    url = "sqlite://" if in_memory else f"sqlite:///{tmp_path / 'users.db'}"
    engine = build_engine(url)
    metadata.create_all(engine)
    service = UserService(engine)

    results = await asyncio.gather(
        *(
            run_blocking(
                service.create_user,
                UserCreate(first_name=f"User{i}", last_name="Test", email=f"user{i}@x.com"),
                failure=AddingUserError,
            )
            for i in range(50)
        )
    )

    assert all(len(created) == 1 for created in results)
    stored = service.list_users()
    assert len(stored) == 50
    assert {user["user_id"] for user in stored} == {created[0]["user_id"] for created in results}
    engine.dispose()
