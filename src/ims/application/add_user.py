"""Application service: Add User use case.

Registers a directory profile so changes made by that user are
attributed to their first name.  Credentials are not handled here.
"""

from __future__ import annotations

from ims.domain.exceptions import ValidationError
from ims.domain.model.user import UserProfile
from ims.domain.repository.user_repository import UserRepository


class AddUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(
        self, user_id: str, first_name: str, role: str = "Employee", photo_url: str = ""
    ) -> UserProfile:
        if not user_id or not user_id.strip():
            raise ValidationError("User ID is required")
        if not first_name or not first_name.strip():
            raise ValidationError("First name is required")
        user = UserProfile(
            id=user_id.strip(),
            first_name=first_name.strip(),
            role=role.strip() or "Employee",
            photo_url=photo_url,
        )
        self._user_repo.save(user)
        return user
