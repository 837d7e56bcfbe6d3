"""User identity, tagged by role rather than subclassed per role."""

from __future__ import annotations

from dataclasses import dataclass

from program_engine.models.enums import UserRole


@dataclass(frozen=True)
class User:
    """A trainer or a client. Behaviour that differs per role is
    dispatched on ``role``; there is no Trainer/Client class hierarchy."""

    id: str
    role: UserRole
    email: str = ""
    full_name: str = ""

    @property
    def is_trainer(self) -> bool:
        return self.role == UserRole.TRAINER

    @property
    def is_client(self) -> bool:
        return self.role == UserRole.CLIENT
