from sqlalchemy.orm import Session
from typing import List
from fastapi import Depends
import logging

from apps.certificates.models import Certificate
from apps.certificates.schemas import CertificateCreate, CertificateUpdate
from apps.job_requests.models import JobRequest
from core.database import get_db
from core.exceptions import NotFoundError
from core.numbering import format_certificate_number
from core.sequences import SequenceGenerator
from core.transactions import run_transaction

logger = logging.getLogger(__name__)


class CertificateService:
    def __init__(self, db: Session):
        self.db = db
        self.sequences = SequenceGenerator(db)

    def get_certificates(self, job_request_id: int) -> List[Certificate]:
        return (
            self.db.query(Certificate)
            .filter(Certificate.job_request_id == job_request_id)
            .order_by(Certificate.date_of_calibration.desc(), Certificate.id.desc())
            .all()
        )

    def create_certificate(self, data: CertificateCreate) -> Certificate:
        """Issue the next ``<job_number>-NN`` certificate for a job request"""

        def work(db: Session) -> Certificate:
            job_request = db.get(JobRequest, data.job_request_id)
            if job_request is None:
                raise NotFoundError("Job request", data.job_request_id)

            sequence = self.sequences.next_certificate_sequence(
                job_request.id, job_request.job_number
            )
            certificate = Certificate(
                certificate_number=format_certificate_number(job_request.job_number, sequence),
                **data.model_dump(),
            )
            db.add(certificate)
            db.flush()
            return certificate

        certificate = run_transaction(self.db, work)
        logger.info(f"Certificate {certificate.certificate_number} issued")
        return certificate

    def update_certificate(self, certificate_id: int, data: CertificateUpdate) -> Certificate:
        def work(db: Session) -> Certificate:
            certificate = db.get(Certificate, certificate_id)
            if certificate is None:
                raise NotFoundError("Certificate", certificate_id)
            for field, value in data.model_dump().items():
                setattr(certificate, field, value)
            db.flush()
            return certificate

        return run_transaction(self.db, work)


# Dependency injection
def get_certificate_service(db: Session = Depends(get_db)) -> CertificateService:
    return CertificateService(db)
