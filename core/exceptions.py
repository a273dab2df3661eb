"""
Typed errors raised by the job workflow.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer answers with, so handlers catch by type instead of parsing messages.

    WorkflowError (base)
    |
    +-- ValidationError          400
    +-- NotFoundError            404
    +-- ConflictError            409
    |   +-- IllegalTransitionError
    +-- TransientStoreError      500
"""

from typing import Optional


class WorkflowError(Exception):
    """Base class for all workflow errors."""

    code: str = "WORKFLOW_ERROR"
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(WorkflowError):
    """A required field is missing or malformed. Nothing was written."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(WorkflowError):
    """A referenced parent row (job, customer, job request) does not exist."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, identifier: Optional[object] = None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found")


class ConflictError(WorkflowError):
    """A uniqueness rule was violated; the transaction was rolled back."""

    code = "CONFLICT"
    status_code = 409


class IllegalTransitionError(ConflictError):
    """The requested status change is not in the transition table."""

    code = "ILLEGAL_TRANSITION"

    def __init__(self, job_id: int, current: str, target: str):
        self.job_id = job_id
        self.current = current
        self.target = target
        super().__init__(
            f"Job {job_id} cannot move from '{current}' to '{target}'"
        )


class TransientStoreError(WorkflowError):
    """Connection, timeout or deadlock in the store. Callers must resubmit."""

    code = "STORE_UNAVAILABLE"
    status_code = 500
