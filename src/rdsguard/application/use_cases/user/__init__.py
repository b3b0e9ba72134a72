"""User use cases."""

from rdsguard.application.use_cases.user.approve_user import ApproveUserUseCase
from rdsguard.application.use_cases.user.get_user import GetUserUseCase
from rdsguard.application.use_cases.user.list_users import ListUsersUseCase
from rdsguard.application.use_cases.user.preapprove_user import PreapproveUserUseCase
from rdsguard.application.use_cases.user.update_user import UpdateUserUseCase

__all__ = [
    "ApproveUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "PreapproveUserUseCase",
    "UpdateUserUseCase",
]
