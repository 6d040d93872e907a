"""
Test suite for BaseCRUD generic database operations.

Tests basic CRUD functionality: create, read (by ID and all), update, delete, exists.
Runs against the in-memory SQLite database with a real model.

System role: Verification of generic database layer foundation
"""

import uuid

import pytest

from jobtracker.boundary.db.CRUD.base_crud import BaseCRUD, like_pattern
from jobtracker.boundary.db.models import UserModel


@pytest.fixture
def base_crud() -> BaseCRUD:
    """Provide BaseCRUD instance bound to UserModel."""
    return BaseCRUD(UserModel)


class TestBaseCRUDCreate:
    """Test suite for BaseCRUD.create() method."""

    async def test_create_should_generate_id_and_timestamps(self, base_crud, test_async_db) -> None:
        # Act
        instance = await base_crud.create(test_async_db, email="linus@example.com", name="Linus")

        # Assert
        assert isinstance(instance.id, uuid.UUID)
        assert instance.created_at is not None
        assert instance.updated_at is not None


class TestBaseCRUDRead:
    """Test suite for get_by_id(), get_all() and exists()."""

    async def test_get_by_id_should_return_model_when_found(self, base_crud, test_async_db, user) -> None:
        result = await base_crud.get_by_id(test_async_db, user.id)

        assert result is not None
        assert result.email == "ada@example.com"

    async def test_get_by_id_should_return_none_when_not_found(self, base_crud, test_async_db) -> None:
        assert await base_crud.get_by_id(test_async_db, uuid.uuid4()) is None

    async def test_get_all_should_apply_limit_and_offset(
        self, base_crud, test_async_db, user, other_user
    ) -> None:
        # Act
        everything = await base_crud.get_all(test_async_db)
        first = await base_crud.get_all(test_async_db, limit=1)
        rest = await base_crud.get_all(test_async_db, limit=10, offset=1)

        # Assert
        assert len(everything) == 2
        assert len(first) == 1
        assert len(rest) == 1
        assert first[0].id != rest[0].id

    async def test_exists_should_reflect_presence(self, base_crud, test_async_db, user) -> None:
        assert await base_crud.exists(test_async_db, user.id) is True
        assert await base_crud.exists(test_async_db, uuid.uuid4()) is False


class TestBaseCRUDUpdate:
    """Test suite for BaseCRUD.update_by_id() method."""

    async def test_update_should_return_refreshed_instance(self, base_crud, test_async_db, user) -> None:
        # Act
        updated = await base_crud.update_by_id(test_async_db, user.id, name="Augusta Ada King")

        # Assert
        assert updated is not None
        assert updated.name == "Augusta Ada King"
        assert updated.email == "ada@example.com"

    async def test_update_should_return_none_when_missing(self, base_crud, test_async_db) -> None:
        assert await base_crud.update_by_id(test_async_db, uuid.uuid4(), name="x") is None


class TestBaseCRUDDelete:
    """Test suite for BaseCRUD.delete_by_id() method."""

    async def test_delete_should_report_whether_a_row_was_removed(
        self, base_crud, test_async_db, user
    ) -> None:
        # Arrange
        user_id = user.id

        # Act
        first = await base_crud.delete_by_id(test_async_db, user_id)
        second = await base_crud.delete_by_id(test_async_db, user_id)

        # Assert
        assert first is True
        assert second is False
        assert await base_crud.exists(test_async_db, user_id) is False


class TestLikePattern:
    """Test suite for like_pattern()."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Acme", "%acme%"),
            ("100%", "%100\\%%"),
            ("r_d", "%r\\_d%"),
            ("a\\b", "%a\\\\b%"),
        ],
    )
    def test_should_escape_wildcards(self, text: str, expected: str) -> None:
        assert like_pattern(text) == expected
