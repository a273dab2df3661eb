"""
Job lifecycle state machine.

    pending_inspection -> pending_quotation -> pending_approval -> approved
        -> ready_for_delivery -> completed

Any non-terminal status may also move to ``cancelled``. ``completed`` and
``cancelled`` are terminal. Every other move belongs to the trigger that
writes its child rows, so a bare status change may only cancel. Callers
run every transition inside ``core.transactions.run_transaction``
together with the child rows it creates.
"""

import logging
from typing import Dict, FrozenSet, Optional

from sqlalchemy.orm import Session

from apps.jobs.models import Job, JobStatus
from core.exceptions import IllegalTransitionError, NotFoundError

logger = logging.getLogger(__name__)

PIPELINE = (
    JobStatus.PENDING_INSPECTION,
    JobStatus.PENDING_QUOTATION,
    JobStatus.PENDING_APPROVAL,
    JobStatus.APPROVED,
    JobStatus.READY_FOR_DELIVERY,
    JobStatus.COMPLETED,
)

TERMINAL_STATUSES: FrozenSet[JobStatus] = frozenset({JobStatus.COMPLETED, JobStatus.CANCELLED})

# Targets reachable without writing any child row
GENERIC_TARGETS: FrozenSet[JobStatus] = frozenset({JobStatus.CANCELLED})


def _build_transitions() -> Dict[JobStatus, FrozenSet[JobStatus]]:
    table = {}
    for current, following in zip(PIPELINE, PIPELINE[1:]):
        table[current] = frozenset({following, JobStatus.CANCELLED})
    for status in TERMINAL_STATUSES:
        table[status] = frozenset()
    return table


TRANSITIONS: Dict[JobStatus, FrozenSet[JobStatus]] = _build_transitions()


def can_transition(current: JobStatus, target: JobStatus) -> bool:
    return JobStatus(target) in TRANSITIONS[JobStatus(current)]


def next_status(current: JobStatus) -> Optional[JobStatus]:
    """The following pipeline stage, or None for terminal statuses."""
    current = JobStatus(current)
    if current in TERMINAL_STATUSES:
        return None
    return PIPELINE[PIPELINE.index(current) + 1]


class JobStateMachine:
    """Loads jobs under a row lock and applies checked status changes."""

    def __init__(self, db: Session):
        self.db = db

    def load(self, job_id: int, lock: bool = True) -> Job:
        query = self.db.query(Job).filter(Job.id == job_id)
        if lock:
            query = query.with_for_update()
        job = query.populate_existing().first()
        if job is None:
            raise NotFoundError("Job", job_id)
        return job

    def check(self, job: Job, target: JobStatus) -> None:
        """Raise before any child row is written if ``target`` is not reachable."""
        target = JobStatus(target)
        if not can_transition(job.status, target):
            raise IllegalTransitionError(job.id, job.status.value, target.value)

    def ensure_status(self, job: Job, target: JobStatus, *allowed: JobStatus) -> None:
        """Reject a trigger that needs the job in one of ``allowed``."""
        if job.status not in allowed:
            raise IllegalTransitionError(job.id, job.status.value, JobStatus(target).value)

    def advance(self, job: Job, target: JobStatus) -> Job:
        target = JobStatus(target)
        self.check(job, target)
        previous = job.status
        job.status = target
        self.db.flush()
        logger.info(
            "Job %s (%s) moved %s -> %s", job.id, job.job_number, previous.value, target.value
        )
        return job

    def apply(self, job: Job, target: JobStatus) -> Job:
        """Like ``advance`` but requesting the current status is a no-op."""
        if job.status == JobStatus(target):
            return job
        return self.advance(job, target)

    def change_status(self, job: Job, target: JobStatus) -> Job:
        """Status-only change; only targets in ``GENERIC_TARGETS`` are accepted."""
        target = JobStatus(target)
        if target not in GENERIC_TARGETS:
            raise IllegalTransitionError(job.id, job.status.value, target.value)
        return self.advance(job, target)
