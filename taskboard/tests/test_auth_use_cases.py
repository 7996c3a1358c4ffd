from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from taskboard.application.services.password_hashing import WerkzeugPasswordHasher
from taskboard.application.use_cases.users.get_profile import GetProfileUseCase
from taskboard.application.use_cases.users.login_user import LoginUserUseCase
from taskboard.application.use_cases.users.register_user import RegisterUserUseCase
from taskboard.application.use_cases.users.update_profile import UpdateProfileUseCase
from taskboard.domain.users.entities import IssuedToken, TokenClaims, User
from taskboard.domain.users.exceptions import (
    EmailTakenError,
    InvalidCredentialsError,
    UserAlreadyExistsError,
)
from taskboard.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from taskboard.shared.errors import UnauthorizedError


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def update_profile(
        self, user_id: int, *, name: str | None = None, email: str | None = None
    ) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        updated = replace(
            user,
            name=name if name is not None else user.name,
            email=email if email is not None else user.email,
        )
        self._users[user_id] = updated
        return updated


class FakeTokenService(TokenService):
    def sign(self, claims: TokenClaims) -> IssuedToken:
        return IssuedToken(
            token=f"token-{claims.user_id}",
            claims=claims,
            expires_at=datetime.now(UTC) + timedelta(days=7),
        )

    def verify(self, token: str) -> TokenClaims | None:
        return None


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


def _register(users: UserRepository, hasher: PasswordHasher | None = None) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=hasher or DeterministicHasher())


def _login(users: UserRepository, hasher: PasswordHasher | None = None) -> LoginUserUseCase:
    return LoginUserUseCase(
        users=users, tokens=FakeTokenService(), password_hasher=hasher or DeterministicHasher()
    )


def test_register_user_success(users: InMemoryUserRepository) -> None:
    user = _register(users).execute("Alice", "alice@example.com", "secret123")

    assert user.id == 1
    assert user.name == "Alice"
    assert user.password_hash == "hashed:secret123"
    assert users.find_by_email("alice@example.com") == user


def test_register_duplicate_email_conflicts(users: InMemoryUserRepository) -> None:
    use_case = _register(users)
    use_case.execute("Alice", "alice@example.com", "secret123")

    with pytest.raises(UserAlreadyExistsError) as excinfo:
        use_case.execute("Other", "alice@example.com", "another1")

    assert excinfo.value.status == 409
    assert excinfo.value.code == "user_already_exists"


def test_login_success_issues_token(users: InMemoryUserRepository) -> None:
    _register(users).execute("Alice", "alice@example.com", "secret123")

    user, issued = _login(users).execute("alice@example.com", "secret123")

    assert user.email == "alice@example.com"
    assert issued.token == f"token-{user.id}"
    assert issued.claims == TokenClaims(user_id=user.id, email=user.email)


def test_login_wrong_password_and_unknown_email_look_the_same(
    users: InMemoryUserRepository,
) -> None:
    _register(users).execute("Alice", "alice@example.com", "secret123")
    use_case = _login(users)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        use_case.execute("alice@example.com", "nope-nope")
    with pytest.raises(InvalidCredentialsError) as unknown_email:
        use_case.execute("ghost@example.com", "secret123")

    assert wrong_password.value.to_dict() == unknown_email.value.to_dict()
    assert wrong_password.value.message == "Invalid email or password"


class CountingHasher(DeterministicHasher):
    def __init__(self) -> None:
        self.verify_calls = 0

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return super().verify(password, hashed)


def test_login_unknown_email_still_checks_a_hash(users: InMemoryUserRepository) -> None:
    hasher = CountingHasher()
    use_case = _login(users, hasher)

    with pytest.raises(InvalidCredentialsError):
        use_case.execute("ghost@example.com", "login-timing-placeholder")
    with pytest.raises(InvalidCredentialsError):
        use_case.execute("ghost@example.com", "secret123")

    assert hasher.verify_calls == 2


def test_login_with_real_hasher(users: InMemoryUserRepository) -> None:
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
    _register(users, hasher).execute("Alice", "alice@example.com", "secret123")

    stored = users.find_by_email("alice@example.com")
    assert stored is not None
    assert stored.password_hash != "secret123"

    user, _ = _login(users, hasher).execute("alice@example.com", "secret123")
    assert user.id == stored.id
    with pytest.raises(InvalidCredentialsError):
        _login(users, hasher).execute("alice@example.com", "secret124")


def test_hasher_rejects_empty_or_malformed_hash() -> None:
    hasher = WerkzeugPasswordHasher()

    assert hasher.verify("secret123", "") is False
    assert hasher.verify("secret123", "not-a-hash") is False


def test_get_profile_for_deleted_user_is_unauthorized(users: InMemoryUserRepository) -> None:
    with pytest.raises(UnauthorizedError):
        GetProfileUseCase(users=users).execute(99)


def test_update_profile_changes_name(users: InMemoryUserRepository) -> None:
    user = _register(users).execute("Alice", "alice@example.com", "secret123")

    updated = UpdateProfileUseCase(users=users).execute(user.id, name="Alicia")

    assert updated.name == "Alicia"
    assert updated.email == "alice@example.com"


def test_update_profile_rejects_email_of_another_account(
    users: InMemoryUserRepository,
) -> None:
    register = _register(users)
    alice = register.execute("Alice", "alice@example.com", "secret123")
    register.execute("Bob", "bob@example.com", "secret123")

    with pytest.raises(EmailTakenError) as excinfo:
        UpdateProfileUseCase(users=users).execute(alice.id, email="bob@example.com")

    assert excinfo.value.status == 400


def test_update_profile_keeping_own_email_is_allowed(users: InMemoryUserRepository) -> None:
    alice = _register(users).execute("Alice", "alice@example.com", "secret123")

    updated = UpdateProfileUseCase(users=users).execute(
        alice.id, email="alice@example.com"
    )

    assert updated.email == "alice@example.com"
