"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from domain.models import AppUser, AuthSession
from domain.schemas.user_schemas import UserResponse, TokenResponse


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: AppUser) -> UserResponse:
        return UserResponse(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            created_at=user.created_at,
        )

    @staticmethod
    def to_token(session: AuthSession) -> TokenResponse:
        return TokenResponse(
            access_token=session.token,
            expires_at=session.expires_at,
            user_id=session.user_id,
        )
