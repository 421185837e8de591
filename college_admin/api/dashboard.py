from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from college_admin.api.deps import get_db, require_staff
from college_admin.core.dashboard import compute_dashboard
from college_admin.schemas.dashboard import DashboardReport

router = APIRouter()


@router.get("/stats", response_model=DashboardReport)
def get_dashboard_stats(db: Session = Depends(get_db), current_user=Depends(require_staff)):
    return compute_dashboard(db)
