"""Analytics endpoints (owner only).

Both endpoints run the same aggregation and differ only in response shape.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from feedback_app.middleware.auth import get_current_admin_id
from feedback_app.models.database import get_db
from feedback_app.schemas.analytics import QuestionAnalyticsReport, SessionAnalyticsReport
from feedback_app.services.analytics import AnalyticsAggregator

router = APIRouter()


@router.get(
    "/analytics/sessions/{session_id}/questions",
    response_model=QuestionAnalyticsReport,
)
def question_analytics(
    session_id: int,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> QuestionAnalyticsReport:
    """Per-question analytics in the dashboard shape."""
    analytics = AnalyticsAggregator(db).aggregate(session_id, admin_id)
    return QuestionAnalyticsReport.from_analytics(analytics)


@router.get(
    "/sessions/analytics/{session_id}",
    response_model=SessionAnalyticsReport,
)
def session_analytics(
    session_id: int,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> SessionAnalyticsReport:
    """Per-question analytics with the session's response total."""
    analytics = AnalyticsAggregator(db).aggregate(session_id, admin_id)
    return SessionAnalyticsReport.from_analytics(analytics)
