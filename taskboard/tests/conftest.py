from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator

import pytest

# Settings are read once at import time, so the environment must be ready
# before anything under ``taskboard`` is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="taskboard-tests-")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-with-enough-length-0123")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP_DIR, "app.log"))
os.environ.setdefault("APP_ENV", "test")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from taskboard.infrastructure.db import Base  # noqa: E402
from taskboard.infrastructure.db import models  # noqa: E402,F401


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker]:
    """Fresh in-memory database per test."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
