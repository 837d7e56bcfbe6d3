"""Role checks for acting users, dispatched on the ``UserRole`` tag."""

from __future__ import annotations

from typing import Callable

from program_engine.exceptions import AccessDeniedError
from program_engine.models.enums import UserRole
from program_engine.models.program import Program
from program_engine.models.user import User

# action -> role -> predicate(user, program)
_RULES: dict[str, dict[UserRole, Callable[[User, Program], bool]]] = {
    "log": {
        UserRole.CLIENT: lambda user, program: user.id == program.client_id,
    },
    "review": {
        UserRole.TRAINER: lambda user, program: user.id == program.trainer_id,
    },
    "author": {
        UserRole.TRAINER: lambda user, program: user.id == program.trainer_id,
    },
}


def is_allowed(user: User, action: str, program: Program) -> bool:
    """True if *user* may perform *action* on *program*."""
    check = _RULES[action].get(user.role)
    return check is not None and check(user, program)


def ensure_allowed(user: User | None, action: str, program: Program) -> None:
    """Raise AccessDeniedError unless *user* may perform *action*.

    A ``None`` user means the caller has already authorised the request.
    """
    if user is None:
        return
    if not is_allowed(user, action, program):
        raise AccessDeniedError(
            f"{user.role.name.lower()} {user.id} may not {action} program {program.id}"
        )
