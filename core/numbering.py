"""Formatting of business document numbers from sequence values."""

from datetime import date
from typing import Optional

JOB_NUMBER_PREFIX = "JB"
JOB_REQUEST_PREFIX = "ASC"
ACCREDITED = "accredited"


def format_job_number(year: int, month: int, sequence: int) -> str:
    """``JB`` + four digit year + two digit month + four digit sequence."""
    return f"{JOB_NUMBER_PREFIX}{year:04d}{month:02d}{sequence:04d}"


def format_job_request_number(request_date: date, job_type: str, sequence: int) -> str:
    """
    ``ASC<yy>/<A?><MM><DD><seq>``; the ``A`` marks accredited work.

    >>> format_job_request_number(date(2025, 5, 14), "accredited", 1)
    'ASC25/A051401'
    """
    type_part = "A" if job_type.lower() == ACCREDITED else ""
    return (
        f"{JOB_REQUEST_PREFIX}{request_date.year % 100:02d}/"
        f"{type_part}{request_date.month:02d}{request_date.day:02d}{sequence:02d}"
    )


def format_certificate_number(job_number: str, sequence: int) -> str:
    return f"{job_number}-{sequence:02d}"


def parse_certificate_sequence(certificate_number: str) -> Optional[int]:
    """Numeric suffix after the last ``-``, or None when there is none."""
    _, sep, suffix = certificate_number.rpartition("-")
    if not sep or not suffix.isdigit():
        return None
    return int(suffix)
