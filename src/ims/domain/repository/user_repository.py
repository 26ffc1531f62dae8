"""Abstract repository for the user directory."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.user import UNKNOWN_ACTOR, UserProfile


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> UserProfile | None:
        """Return a profile by user ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[UserProfile]:
        """Return every profile."""

    @abstractmethod
    def save(self, user: UserProfile) -> None:
        """Persist a new or updated profile."""

    def display_name(self, user_id: str | None) -> str:
        """Resolve the name used to attribute changes to *user_id*."""
        if not user_id:
            return UNKNOWN_ACTOR
        user = self.get_by_id(user_id)
        return user.display_name if user is not None else UNKNOWN_ACTOR
