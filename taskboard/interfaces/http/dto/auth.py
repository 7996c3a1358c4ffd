# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from taskboard.domain.users.entities import User
from taskboard.shared.errors.validation_types import ValidationErrorType

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PASSWORD_MIN_LENGTH = 6


def _validate_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            ValidationErrorType.EMAIL_INVALID,
            "Invalid email address",
            {},
        )
    return value


def _validate_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError(
            ValidationErrorType.NAME_BLANK,
            "Name is required",
            {},
        )
    return value


class RegisterRequestDTO(BaseModel):
    name: str = Field(max_length=100)
    email: str = Field(max_length=255)
    password: str = Field(max_length=128)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _validate_name(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError(
                ValidationErrorType.PASSWORD_TOO_SHORT,
                "Password must be at least 6 characters",
                {"min_length": PASSWORD_MIN_LENGTH},
            )
        return value


class LoginRequestDTO(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(min_length=1, max_length=128)  # No length policy on login

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _validate_email(value)


class UpdateProfileRequestDTO(BaseModel):
    name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return None if value is None else _validate_name(value)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return None if value is None else _validate_email(value)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "UpdateProfileRequestDTO":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise PydanticCustomError(
                    ValidationErrorType.NOT_NULLABLE,
                    "{field} cannot be null",
                    {"field": name},
                )
        return self


class PublicUserDTO(BaseModel):
    """User fields safe to return to clients."""

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, validate_by_name=True)

    @classmethod
    def from_entity(cls, user: User) -> "PublicUserDTO":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
