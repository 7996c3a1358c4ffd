# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from enum import StrEnum


class ValidationErrorType(StrEnum):
    NOT_NULLABLE = "not_nullable"
    EMAIL_INVALID = "email_invalid"
    NAME_BLANK = "name_blank"
    PASSWORD_TOO_SHORT = "password_too_short"
    TITLE_BLANK = "title_blank"
    INVARIANT = "invariant"


__all__ = ["ValidationErrorType"]
