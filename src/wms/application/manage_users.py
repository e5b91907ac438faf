"""Application services: user administration.

Registration creates a pending account; an administrator approves it,
changes its role or removes it.
"""

from __future__ import annotations

import logging

from wms.application.dto import UserDTO
from wms.domain.exceptions import NotFoundError, ValidationError
from wms.domain.model.user import User
from wms.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class RegisterUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, username: str) -> UserDTO:
        user = User.register(username)
        if self._user_repo.get_by_username(user.username) is not None:
            raise ValidationError(f"User '{user.username}' already exists")
        self._user_repo.save(user)
        logger.info("User %s registered, awaiting approval", user.username)
        return UserDTO.from_user(user)


class ApproveUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, username: str) -> UserDTO:
        user = _load(self._user_repo, username)
        user.approve()
        self._user_repo.save(user)
        logger.info("User %s approved", user.username)
        return UserDTO.from_user(user)


class ChangeUserRoleHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, username: str, role: str) -> UserDTO:
        user = _load(self._user_repo, username)
        user.change_role(role)
        self._user_repo.save(user)
        logger.info("User %s is now %s", user.username, user.role.value)
        return UserDTO.from_user(user)


class RemoveUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, username: str) -> None:
        if not self._user_repo.delete(username):
            raise NotFoundError(f"User '{username}' not found")
        logger.info("User %s removed", username)


class ListUsersHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self) -> list[UserDTO]:
        return [UserDTO.from_user(u) for u in self._user_repo.list_all()]


def _load(user_repo: UserRepository, username: str) -> User:
    user = user_repo.get_by_username(username)
    if user is None:
        raise NotFoundError(f"User '{username}' not found")
    return user
