"""Custom exception hierarchy for the program engine."""

from __future__ import annotations

from program_engine.models.enums import WorkoutStatus


class ProgramEngineError(Exception):
    """Base exception for all program_engine errors."""


class ValidationError(ProgramEngineError):
    """Input rejected at a create/edit boundary (missing field, bad date, ...)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(ProgramEngineError):
    """A program, week, day or exercise identifier did not resolve."""

    def __init__(self, kind: str, identifier: object) -> None:
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class StateError(ProgramEngineError):
    """Workflow violation, e.g. reviewing a day that was never submitted."""

    def __init__(self, message: str, status: WorkoutStatus | None = None) -> None:
        super().__init__(message)
        self.status = status


class AccessDeniedError(ProgramEngineError):
    """The acting user's role or identity does not permit the operation."""
