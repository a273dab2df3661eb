from sqlalchemy.orm import Session
from typing import Dict, List
from fastapi import Depends

from apps.jobs.models import JobStatus
from apps.jobs.views import JobBoardView
from core.database import get_db


class DashboardService:
    def __init__(self, db: Session):
        self.view = JobBoardView(db)

    def get_stats(self) -> Dict[str, int]:
        """Job count for every status, zero where there are none."""
        counts = self.view.status_counts()
        return {status.value: counts.get(status.value, 0) for status in JobStatus}

    def get_jobs(self, status: JobStatus) -> List[dict]:
        return self.view.list_by_status(status)


# Dependency injection
def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)
