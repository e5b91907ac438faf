"""Abstract repository for User accounts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_username(self, username: str) -> User | None:
        """Return a user by (case-insensitive) username, or None."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user."""

    @abstractmethod
    def delete(self, username: str) -> bool:
        """Remove a user; return False when there was nothing to remove."""
