"""
User CRUD operations.

Dependencies: sqlalchemy, jobtracker.boundary.db.models
System role: User persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.base_crud import BaseCRUD
from jobtracker.boundary.db.models.user_model import UserModel
from jobtracker.boundary.db.upsert import upsert


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel with email lookup and upsert."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_email(self, session: AsyncSession, email: str) -> UserModel | None:
        """
        Retrieve a user by email.

        Args:
            session: Async database session
            email: Account email

        Returns:
            UserModel if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_by_email(
        self,
        session: AsyncSession,
        email: str,
        name: str | None,
        image: str | None,
    ) -> UserModel:
        """
        Insert a user or refresh name and image of the existing one.

        Args:
            session: Async database session
            email: Account email (unique key)
            name: Display name
            image: Avatar URL

        Returns:
            UserModel: Inserted or updated user
        """
        return await upsert(
            session,
            UserModel,
            {"email": email, "name": name, "image": image},
            conflict_columns=["email"],
            update_columns=["name", "image"],
        )


user_crud = UserCRUD()
