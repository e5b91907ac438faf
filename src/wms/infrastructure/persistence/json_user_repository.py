"""JSON-file-backed implementation of UserRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from wms.domain.model.user import User, UserRole, UserStatus
from wms.domain.repository.user_repository import UserRepository
from wms.infrastructure.persistence.json_store import JsonCollection


class JsonUserRepository(UserRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    def get_by_username(self, username: str) -> User | None:
        for raw in self._collection.load():
            if raw["username"].lower() == username.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[User]:
        return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, user: User) -> None:
        self._collection.upsert(self._to_raw(user), key="username")

    def delete(self, username: str) -> bool:
        user = self.get_by_username(username)
        if user is None:
            return False
        return self._collection.remove(user.username, key="username")

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "username": user.username,
            "role": user.role.value,
            "status": user.status.value,
            "createdAt": user.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> User:
        return User(
            username=raw["username"],
            role=UserRole(raw["role"]),
            status=UserStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["createdAt"]),
        )
