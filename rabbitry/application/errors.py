from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class DuplicateNameError(ConflictError):
    code = "duplicate_name"


class DuplicateHutchError(ConflictError):
    code = "duplicate_hutch"


class CapacityExceededError(ConflictError):
    code = "capacity_exceeded"


class OccupiedHutchError(ConflictError):
    code = "occupied_hutch"


class InvalidExpansionError(ConflictError):
    code = "invalid_expansion"


class HutchFullError(ConflictError):
    code = "hutch_full"


class ActiveBreedingRecordError(ConflictError):
    code = "active_breeding_record"


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class CollaboratorError(InfrastructureError):
    """The backing store failed; raised unchanged so the caller can retry."""

    code = "collaborator_error"
