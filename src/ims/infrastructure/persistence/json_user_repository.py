"""Document-store implementation of UserRepository."""

from __future__ import annotations

from ims.domain.model.user import UserProfile
from ims.domain.repository.user_repository import UserRepository
from ims.infrastructure.persistence.json_document_store import JsonDocumentStore

_ROOT = "users"


class JsonUserRepository(UserRepository):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store

    def get_by_id(self, user_id: str) -> UserProfile | None:
        raw = self._store.get(f"{_ROOT}/{user_id}")
        return None if raw is None else self._to_domain(user_id, raw)

    def list_all(self) -> list[UserProfile]:
        return [
            self._to_domain(user_id, raw)
            for user_id, raw in self._store.children(_ROOT).items()
        ]

    def save(self, user: UserProfile) -> None:
        self._store.update(
            f"{_ROOT}/{user.id}",
            {"firstName": user.first_name, "role": user.role, "photoURL": user.photo_url},
        )

    @staticmethod
    def _to_domain(user_id: str, raw: dict) -> UserProfile:
        return UserProfile(
            id=user_id,
            first_name=raw.get("firstName", ""),
            role=raw.get("role", "Employee"),
            photo_url=raw.get("photoURL", ""),
        )
