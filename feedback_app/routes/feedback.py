"""Feedback endpoints: public submission and owner-only listing."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from feedback_app.middleware.auth import get_current_admin_id
from feedback_app.models.database import get_db
from feedback_app.models.response import Answer, FeedbackResponse
from feedback_app.schemas.feedback import FeedbackAccepted, FeedbackSubmission
from feedback_app.schemas.session import FeedbackResponseOut
from feedback_app.services.feedback_engine import FeedbackSubmissionEngine
from feedback_app.services.ownership import get_owned_session

router = APIRouter(prefix="/feedback")


@router.post("/{session_id}", response_model=FeedbackAccepted, status_code=201)
def submit_feedback(
    session_id: int,
    payload: FeedbackSubmission,
    db: Session = Depends(get_db),
) -> FeedbackAccepted:
    """Submit one respondent's answers for a session.

    Raises:
        SessionNotFoundError(404): If the session does not exist
        ValidationError(400): If answers are missing, unknown or mistyped
    """
    response = FeedbackSubmissionEngine(db).submit(session_id, payload.answers)
    return FeedbackAccepted(
        message="Feedback submitted successfully",
        feedback_response_id=response.id,
    )


@router.get("/{session_id}", response_model=List[FeedbackResponseOut])
def list_feedback(
    session_id: int,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> List[FeedbackResponse]:
    """List every response for a session the caller owns."""
    get_owned_session(db, session_id, admin_id)

    return list(
        db.execute(
            select(FeedbackResponse)
            .where(FeedbackResponse.session_id == session_id)
            .options(
                selectinload(FeedbackResponse.answers).selectinload(Answer.question)
            )
            .order_by(FeedbackResponse.id)
        ).scalars()
    )
