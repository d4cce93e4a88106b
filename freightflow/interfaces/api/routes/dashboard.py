"""Routes serving the role-based dashboard analytics."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from freightflow.application.use_cases import get_dashboard_analytics
from freightflow.config import Settings, get_settings
from freightflow.domain.entities import User
from freightflow.infrastructure.database import get_db
from freightflow.interfaces.api.dependencies import get_role_scoped_user
from freightflow.interfaces.api.schemas import DashboardAnalyticsRead

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/analytics", response_model=DashboardAnalyticsRead)
def read_dashboard_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_role_scoped_user),
    settings: Settings = Depends(get_settings),
) -> DashboardAnalyticsRead:
    """Return the KPI grid and chart series for the caller's role."""

    analytics = get_dashboard_analytics(db, user=current_user, settings=settings)
    return DashboardAnalyticsRead.model_validate(analytics)


__all__ = ["router"]
