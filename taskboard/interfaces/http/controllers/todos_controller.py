# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from taskboard.application.use_cases.todos.create_todo import CreateTodoUseCase
from taskboard.application.use_cases.todos.delete_todo import DeleteTodoUseCase
from taskboard.application.use_cases.todos.get_todo import GetTodoUseCase
from taskboard.application.use_cases.todos.list_todos import ListTodosUseCase
from taskboard.application.use_cases.todos.summarize_todos import SummarizeTodosUseCase
from taskboard.application.use_cases.todos.update_todo import UpdateTodoUseCase
from taskboard.infrastructure.auth import (
    RequestAuthenticator,
    auth_required,
    authed_request,
)
from taskboard.interfaces.http.dto.todos import (
    TodoCreateDTO,
    TodoDTO,
    TodoListDTO,
    TodoListQueryDTO,
    TodoStatsDTO,
    TodoUpdateDTO,
)
from taskboard.shared.errors import InfrastructureError
from taskboard.shared.errors.validation import raise_validation_error
from taskboard.shared.logging import logger


def _elapsed_ms(t0: float) -> float:
    return (perf_counter() - t0) * 1000


class TodosController:
    def __init__(
        self,
        *,
        list_use_case: ListTodosUseCase,
        create_use_case: CreateTodoUseCase,
        get_use_case: GetTodoUseCase,
        update_use_case: UpdateTodoUseCase,
        delete_use_case: DeleteTodoUseCase,
        stats_use_case: SummarizeTodosUseCase,
        authenticator: RequestAuthenticator,
    ) -> None:
        self._list_use_case = list_use_case
        self._create_use_case = create_use_case
        self._get_use_case = get_use_case
        self._update_use_case = update_use_case
        self._delete_use_case = delete_use_case
        self._stats_use_case = stats_use_case
        self._authenticator = authenticator

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("todos", __name__, url_prefix="/api")
        bp.add_url_rule("/todos", view_func=self.list_todos, methods=["GET"])
        bp.add_url_rule("/todos", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/todos/stats", view_func=self.stats, methods=["GET"])
        bp.add_url_rule("/todos/<int:todo_id>", view_func=self.get, methods=["GET"])
        bp.add_url_rule(
            "/todos/<int:todo_id>",
            view_func=self.update,
            methods=["PUT"],
        )
        bp.add_url_rule(
            "/todos/<int:todo_id>",
            view_func=self.delete,
            methods=["DELETE"],
        )
        return bp

    @auth_required
    def list_todos(self) -> Response:
        t0 = perf_counter()
        user_id = authed_request().user_id
        try:
            dto = TodoListQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            page = self._list_use_case.execute(user_id, dto.to_query())
        except SQLAlchemyError as exc:
            logger.exception(f"todos.list: err (user_id={user_id})")
            raise InfrastructureError(code="todos_list_failed") from exc

        logger.info(
            f"todos.list: ok (user_id={user_id}, n={len(page.items)}, "
            f"total={page.total_count}, dt_ms={_elapsed_ms(t0):.0f})"
        )
        return jsonify(TodoListDTO.from_page(page).to_json())

    @auth_required
    def create(self) -> tuple[Response, int]:
        t0 = perf_counter()
        user_id = authed_request().user_id
        try:
            dto = TodoCreateDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            todo = self._create_use_case.execute(user_id, dto.to_draft())
        except SQLAlchemyError as exc:
            logger.exception(f"todo.create: err (user_id={user_id})")
            raise InfrastructureError(code="todo_create_failed") from exc

        logger.info(
            f"todo.create: ok (user_id={user_id}, todo_id={todo.id}, "
            f"dt_ms={_elapsed_ms(t0):.0f})"
        )
        return jsonify(TodoDTO.from_entity(todo).to_json()), 201

    @auth_required
    def stats(self) -> Response:
        user_id = authed_request().user_id
        try:
            summary = self._stats_use_case.execute(user_id)
        except SQLAlchemyError as exc:
            logger.exception(f"todos.stats: err (user_id={user_id})")
            raise InfrastructureError(code="todos_stats_failed") from exc
        return jsonify(TodoStatsDTO.from_stats(summary).to_json())

    @auth_required
    def get(self, todo_id: int) -> Response:
        user_id = authed_request().user_id
        try:
            todo = self._get_use_case.execute(user_id, todo_id)
        except SQLAlchemyError as exc:
            logger.exception(f"todo.get: err (user_id={user_id}, todo_id={todo_id})")
            raise InfrastructureError(code="todo_get_failed") from exc
        return jsonify(TodoDTO.from_entity(todo).to_json())

    @auth_required
    def update(self, todo_id: int) -> Response:
        t0 = perf_counter()
        user_id = authed_request().user_id
        try:
            dto = TodoUpdateDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        patch = dto.to_patch()
        try:
            todo = self._update_use_case.execute(user_id, todo_id, patch)
        except SQLAlchemyError as exc:
            logger.exception(f"todo.update: err (user_id={user_id}, todo_id={todo_id})")
            raise InfrastructureError(code="todo_update_failed") from exc

        logger.info(
            f"todo.update: ok (user_id={user_id}, todo_id={todo_id}, "
            f"fields={sorted(patch.changes())}, dt_ms={_elapsed_ms(t0):.0f})"
        )
        return jsonify(TodoDTO.from_entity(todo).to_json())

    @auth_required
    def delete(self, todo_id: int) -> Response:
        user_id = authed_request().user_id
        try:
            self._delete_use_case.execute(user_id, todo_id)
        except SQLAlchemyError as exc:
            logger.exception(f"todo.delete: err (user_id={user_id}, todo_id={todo_id})")
            raise InfrastructureError(code="todo_delete_failed") from exc

        logger.info(f"todo.delete: ok (user_id={user_id}, todo_id={todo_id})")
        return jsonify({"message": "Todo deleted successfully"})
