"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine

from taskboard.application import (
    CreateTodoUseCase,
    DeleteTodoUseCase,
    GetProfileUseCase,
    GetTodoUseCase,
    ListTodosUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    SummarizeTodosUseCase,
    UpdateProfileUseCase,
    UpdateTodoUseCase,
)
from taskboard.application.services.password_hashing import WerkzeugPasswordHasher
from taskboard.infrastructure.auth import RequestAuthenticator
from taskboard.infrastructure.auth.tokens import JwtTokenService
from taskboard.infrastructure.db import ENGINE, SessionLocal
from taskboard.infrastructure.repositories.todos.sqlalchemy_todo_repository import (
    SqlAlchemyTodoRepository,
)
from taskboard.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from taskboard.infrastructure.unit_of_work import SessionFactory
from taskboard.interfaces.http.controllers.auth_controller import AuthController
from taskboard.interfaces.http.controllers.misc_controller import MiscController
from taskboard.interfaces.http.controllers.todos_controller import TodosController
from taskboard.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        engine: Engine = ENGINE,
        session_factory: SessionFactory = SessionLocal,
    ) -> None:
        self.config = config or load_config()
        self.engine = engine
        self._session_factory = session_factory

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JwtTokenService:
        auth = self.config.auth
        return JwtTokenService(
            secret=auth.jwt_secret,
            ttl=auth.token_ttl,
            algorithm=auth.jwt_algorithm,
        )

    @cached_property
    def authenticator(self) -> RequestAuthenticator:
        return RequestAuthenticator(
            tokens=self.token_service,
            cookie_name=self.config.auth.cookie_name,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self._session_factory)

    @cached_property
    def todo_repository(self) -> SqlAlchemyTodoRepository:
        return SqlAlchemyTodoRepository(self._session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            get_profile_use_case=self.get_profile_use_case,
            update_profile_use_case=self.update_profile_use_case,
            authenticator=self.authenticator,
            security=self.config.security,
            token_ttl=self.config.auth.token_ttl,
        )

    @cached_property
    def todos_controller(self) -> TodosController:
        todos = self.todo_repository
        return TodosController(
            list_use_case=ListTodosUseCase(todos=todos),
            create_use_case=CreateTodoUseCase(todos=todos),
            get_use_case=GetTodoUseCase(todos=todos),
            update_use_case=UpdateTodoUseCase(todos=todos),
            delete_use_case=DeleteTodoUseCase(todos=todos),
            stats_use_case=SummarizeTodosUseCase(todos=todos),
            authenticator=self.authenticator,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
