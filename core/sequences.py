"""
Sequence allocation for business document numbers.

Every counter is a row updated with one atomic insert-or-increment
statement and read back inside the caller's transaction, so two
transactions asking for the same key serialise on that row and a rollback
returns the number. Nothing here commits.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from apps.certificates.models import Certificate, CertificateSequence
from apps.job_requests.models import JobSequence
from core.numbering import JOB_NUMBER_PREFIX, parse_certificate_sequence
from core.upserts import insert_or_increment

logger = logging.getLogger(__name__)


class SequenceGenerator:
    def __init__(self, db: Session):
        self.db = db

    def next_job_request_sequence(self, sequence_date: date, job_type: str) -> int:
        """Next value for the ``(date, job_type)`` key, starting at 1."""
        insert_or_increment(
            self.db,
            JobSequence,
            {"sequence_date": sequence_date, "job_type": job_type, "last_sequence": 1},
            conflict_columns=("sequence_date", "job_type"),
            counter_column="last_sequence",
        )
        value = self.db.execute(
            select(JobSequence.last_sequence).where(
                JobSequence.sequence_date == sequence_date,
                JobSequence.job_type == job_type,
            )
        ).scalar_one()
        logger.debug("Sequence %s/%s -> %s", sequence_date, job_type, value)
        return value

    def next_job_sequence(self, year: int, month: int) -> int:
        """Monthly counter behind intake job numbers."""
        return self.next_job_request_sequence(date(year, month, 1), JOB_NUMBER_PREFIX)

    def scan_certificate_sequence(self, job_request_id: int, job_number: str) -> int:
        """Highest suffix among the job request's existing certificates, 0 if none."""
        numbers = self.db.execute(
            select(Certificate.certificate_number).where(
                Certificate.job_request_id == job_request_id,
                Certificate.certificate_number.like(f"{job_number}-%"),
            )
        ).scalars()
        suffixes = [parse_certificate_sequence(number) for number in numbers]
        return max([s for s in suffixes if s is not None], default=0)

    def next_certificate_sequence(self, job_request_id: int, job_number: str) -> int:
        """
        Next certificate sequence for a job request.

        The first call for a job request seeds its counter from the
        certificates already on file; later calls only increment it.
        """
        seed = self.scan_certificate_sequence(job_request_id, job_number) + 1
        insert_or_increment(
            self.db,
            CertificateSequence,
            {"job_request_id": job_request_id, "last_sequence": seed},
            conflict_columns=("job_request_id",),
            counter_column="last_sequence",
        )
        value = self.db.execute(
            select(CertificateSequence.last_sequence).where(
                CertificateSequence.job_request_id == job_request_id
            )
        ).scalar_one()
        logger.debug("Certificate sequence for job request %s -> %s", job_request_id, value)
        return value
