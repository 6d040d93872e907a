"""
User schemas.

Dependencies: pydantic
System role: Current-user API contracts
"""

from uuid import UUID

from jobtracker.models.common import CamelModel


class UserResponse(CamelModel):
    """Signed-in user."""

    id: UUID
    email: str
    name: str | None = None
    image: str | None = None
