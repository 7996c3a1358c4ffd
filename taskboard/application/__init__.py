# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.todos.create_todo import CreateTodoUseCase
from .use_cases.todos.delete_todo import DeleteTodoUseCase
from .use_cases.todos.get_todo import GetTodoUseCase
from .use_cases.todos.list_todos import ListTodosUseCase
from .use_cases.todos.summarize_todos import SummarizeTodosUseCase
from .use_cases.todos.update_todo import UpdateTodoUseCase
from .use_cases.users.get_profile import GetProfileUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.update_profile import UpdateProfileUseCase

__all__ = [
    "CreateTodoUseCase",
    "DeleteTodoUseCase",
    "GetProfileUseCase",
    "GetTodoUseCase",
    "ListTodosUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "SummarizeTodosUseCase",
    "UpdateProfileUseCase",
    "UpdateTodoUseCase",
]
