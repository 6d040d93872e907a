"""
Authentication service.

Provisions users from Google sign-in and issues/validates the signed
session token stored in the session cookie.

Dependencies: jwt (PyJWT), jobtracker.boundary.db.CRUD
System role: Identity and session use cases
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.CRUD.user_crud import user_crud
from jobtracker.configs.auth import AuthSettings
from jobtracker.core.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)


def user_to_dict(user) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "image": user.image,
    }


class AuthService:
    """Authentication service orchestrator."""

    def __init__(self, db: AsyncSession, settings: AuthSettings) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
            settings: Session cookie and JWT settings
        """
        self.db = db
        self.settings = settings

    async def ensure_user_exists(
        self,
        email: str,
        name: str | None = None,
        image: str | None = None,
    ) -> dict:
        """
        Create the user on first sign-in, refresh profile fields afterwards.

        Args:
            email: Account email (unique key)
            name: Display name
            image: Avatar URL

        Returns:
            dict: User data

        Raises:
            ValidationError: If email is empty
        """
        if not email:
            raise ValidationError("Email is required", field="email")

        try:
            user = await user_crud.upsert_by_email(self.db, email=email, name=name, image=image)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error("Failed to provision user", extra={"error": str(e)})
            raise

        logger.info("User signed in", extra={"user_id": str(user.id)})
        return user_to_dict(user)

    async def get_user(self, user_id: UUID) -> dict | None:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            dict | None: User data, None if the account no longer exists
        """
        user = await user_crud.get_by_id(self.db, user_id)
        return user_to_dict(user) if user else None

    def issue_session_token(self, user: dict, now: datetime | None = None) -> str:
        """
        Sign a session token for a user.

        Args:
            user: User dict from ensure_user_exists
            now: Issue time (defaults to current UTC time)

        Returns:
            str: Encoded JWT with sub, email, iat and exp claims
        """
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user["id"]),
            "email": user["email"],
            "iat": now,
            "exp": now + timedelta(seconds=self.settings.session_max_age),
        }
        return jwt.encode(payload, self.settings.secret_key, algorithm=self.settings.algorithm)

    def decode_session_token(self, token: str) -> UUID:
        """
        Validate a session token.

        Args:
            token: Encoded JWT from the session cookie

        Returns:
            UUID: User ID from the sub claim

        Raises:
            AuthenticationError: If the token is expired, tampered with or malformed
        """
        try:
            claims = jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.algorithm],
                options={"require": ["sub", "exp"]},
            )
            return UUID(claims["sub"])
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Session expired") from e
        except (jwt.InvalidTokenError, ValueError) as e:
            raise AuthenticationError("Invalid session") from e
