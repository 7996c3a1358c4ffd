# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import (
    AppError,
    DomainError,
    InfrastructureError,
    UnauthorizedError,
    ValidationError,
)
from .validation import format_pydantic_errors, raise_validation_error
from .validation_types import ValidationErrorType

__all__ = [
    "AppError",
    "DomainError",
    "InfrastructureError",
    "UnauthorizedError",
    "ValidationError",
    "ValidationErrorType",
    "format_pydantic_errors",
    "raise_validation_error",
]
