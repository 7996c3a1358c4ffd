# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.domain.users.entities import User
from taskboard.domain.users.exceptions import EmailTakenError
from taskboard.domain.users.repositories import UserRepository
from taskboard.shared.errors import UnauthorizedError


class UpdateProfileUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(
        self, user_id: int, *, name: str | None = None, email: str | None = None
    ) -> User:
        if email is not None:
            owner = self._users.find_by_email(email)
            if owner is not None and owner.id != user_id:
                raise EmailTakenError()

        updated = self._users.update_profile(user_id, name=name, email=email)
        if updated is None:
            raise UnauthorizedError()
        return updated


__all__ = ["UpdateProfileUseCase"]
