# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskboard.shared.errors.base import ValidationError
from taskboard.shared.errors.validation_types import ValidationErrorType


class InvariantViolationError(ValidationError):
    def __init__(self, message: str, *, field: str | None = None):
        self.field = field
        field_name = field or "unknown"
        super().__init__(
            message=message,
            context={
                "fields": [field_name],
                "errors": [
                    {
                        "field": field_name,
                        "type": str(ValidationErrorType.INVARIANT),
                        "message": message,
                    }
                ],
            },
        )

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


InvariantViolation = InvariantViolationError
