import pytest

from apps.jobs.models import Job, JobStatus
from apps.jobs.workflow import (
    GENERIC_TARGETS,
    PIPELINE,
    TERMINAL_STATUSES,
    JobStateMachine,
    can_transition,
    next_status,
)
from core.exceptions import ConflictError, IllegalTransitionError, NotFoundError


def test_pipeline_steps_forward_one_stage_at_a_time():
    for current, following in zip(PIPELINE, PIPELINE[1:]):
        assert can_transition(current, following)
        assert next_status(current) == following


def test_stages_cannot_be_skipped_or_reversed():
    assert not can_transition(JobStatus.PENDING_INSPECTION, JobStatus.PENDING_APPROVAL)
    assert not can_transition(JobStatus.APPROVED, JobStatus.PENDING_QUOTATION)
    assert not can_transition(JobStatus.PENDING_INSPECTION, JobStatus.COMPLETED)


def test_any_open_job_can_be_cancelled():
    for status in PIPELINE[:-1]:
        assert can_transition(status, JobStatus.CANCELLED)


def test_terminal_statuses_have_no_exits():
    for terminal in TERMINAL_STATUSES:
        assert next_status(terminal) is None
        for target in JobStatus:
            assert not can_transition(terminal, target)


def test_accepts_plain_string_values():
    assert can_transition("approved", "ready_for_delivery")


def test_illegal_transition_is_a_conflict():
    assert issubclass(IllegalTransitionError, ConflictError)
    err = IllegalTransitionError(3, "pending_inspection", "completed")
    assert err.status_code == 409
    assert err.code == "ILLEGAL_TRANSITION"
    assert "pending_inspection" in err.message


@pytest.fixture
def job(db, customer):
    record = Job(job_number="JB2025050001", customer_id=customer.id, taken_by="Bob")
    db.add(record)
    db.commit()
    return record


def test_new_jobs_start_pending_inspection(job):
    assert job.status == JobStatus.PENDING_INSPECTION


def test_advance_and_apply(db, job):
    machine = JobStateMachine(db)
    loaded = machine.load(job.id)
    machine.advance(loaded, JobStatus.PENDING_QUOTATION)
    assert loaded.status == JobStatus.PENDING_QUOTATION

    # Same status is a no-op for apply, an error for advance
    machine.apply(loaded, JobStatus.PENDING_QUOTATION)
    with pytest.raises(IllegalTransitionError):
        machine.advance(loaded, JobStatus.PENDING_QUOTATION)
    db.rollback()


def test_check_leaves_status_untouched(db, job):
    machine = JobStateMachine(db)
    loaded = machine.load(job.id)
    with pytest.raises(IllegalTransitionError):
        machine.check(loaded, JobStatus.APPROVED)
    assert loaded.status == JobStatus.PENDING_INSPECTION


def test_ensure_status(db, job):
    machine = JobStateMachine(db)
    loaded = machine.load(job.id, lock=False)
    machine.ensure_status(loaded, JobStatus.COMPLETED, JobStatus.PENDING_INSPECTION)
    with pytest.raises(IllegalTransitionError):
        machine.ensure_status(loaded, JobStatus.COMPLETED, JobStatus.READY_FOR_DELIVERY)


def test_load_missing_job(db):
    with pytest.raises(NotFoundError) as excinfo:
        JobStateMachine(db).load(999)
    assert excinfo.value.message == "Job not found"


def test_change_status_only_cancels(db, job):
    assert GENERIC_TARGETS == {JobStatus.CANCELLED}
    machine = JobStateMachine(db)
    loaded = machine.load(job.id)
    # Reachable in the table, but needs an inspection row
    with pytest.raises(IllegalTransitionError):
        machine.change_status(loaded, JobStatus.PENDING_QUOTATION)
    assert loaded.status == JobStatus.PENDING_INSPECTION

    machine.change_status(loaded, JobStatus.CANCELLED)
    assert loaded.status == JobStatus.CANCELLED
    db.rollback()
