"""Feedback session endpoints (admin only)."""

from typing import Dict, List, Optional, Sequence

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from feedback_app.middleware.auth import get_current_admin_id
from feedback_app.models.database import get_db, unit_of_work
from feedback_app.models.question import Question
from feedback_app.models.response import Answer, FeedbackResponse
from feedback_app.models.session import FeedbackSession
from feedback_app.schemas.auth import AdminSummary
from feedback_app.schemas.session import (
    SessionCreate,
    SessionCreated,
    SessionDetail,
    SessionListItem,
    SessionOut,
    ShareLinks,
)
from feedback_app.services.ownership import get_owned_session
from feedback_app.services.question_validator import QuestionValidator
from feedback_app.services.share_links import ShareLinkBuilder
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/sessions")


def _count_by_session(db: Session, column, session_ids: Sequence[int]) -> Dict[int, int]:
    """Count rows per session for a ``session_id`` column."""
    if not session_ids:
        return {}
    rows = db.execute(
        select(column, func.count())
        .where(column.in_(session_ids))
        .group_by(column)
    ).all()
    return {session_id: count for session_id, count in rows}


def _list_sessions(db: Session, admin_id: Optional[int] = None) -> List[SessionListItem]:
    """List sessions newest first with owner summary and counts."""
    stmt = (
        select(FeedbackSession)
        .options(selectinload(FeedbackSession.admin))
        .order_by(FeedbackSession.created_at.desc(), FeedbackSession.id.desc())
    )
    if admin_id is not None:
        stmt = stmt.where(FeedbackSession.admin_id == admin_id)
    sessions = db.execute(stmt).scalars().all()

    ids = [s.id for s in sessions]
    question_counts = _count_by_session(db, Question.session_id, ids)
    response_counts = _count_by_session(db, FeedbackResponse.session_id, ids)

    return [
        SessionListItem(
            id=s.id,
            title=s.title,
            description=s.description,
            date=s.date,
            admin_id=s.admin_id,
            created_at=s.created_at,
            admin=AdminSummary.model_validate(s.admin),
            question_count=question_counts.get(s.id, 0),
            response_count=response_counts.get(s.id, 0),
        )
        for s in sessions
    ]


@router.post("", response_model=SessionCreated, status_code=201)
def create_session(
    payload: SessionCreate,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> SessionCreated:
    """Create a session owned by the caller, optionally with questions.

    The session and its questions are written in one transaction.

    Raises:
        InvalidQuestionError(400): If any embedded question is invalid
    """
    drafts = QuestionValidator.validate_many(payload.questions) if payload.questions else []

    session = FeedbackSession(
        title=payload.title,
        description=payload.description,
        date=payload.date,
        admin_id=admin_id,
    )
    session.questions = [draft.to_model() for draft in drafts]

    with unit_of_work(db):
        db.add(session)

    db.refresh(session)
    logger.info(
        f"Admin {admin_id} created session {session.id} with {len(drafts)} question(s)",
        extra={"admin_id": admin_id, "session_id": session.id},
    )
    return SessionCreated(
        message="Session created successfully",
        session=SessionOut.model_validate(session),
    )


@router.get("", response_model=List[SessionListItem])
def list_sessions(
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> List[SessionListItem]:
    """List every session, newest first."""
    return _list_sessions(db)


@router.get("/admin/{owner_id}", response_model=List[SessionListItem])
def list_sessions_for_admin(
    owner_id: int,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> List[SessionListItem]:
    """List the sessions owned by one admin, newest first."""
    return _list_sessions(db, admin_id=owner_id)


@router.get("/{session_id}", response_model=SessionDetail)
def get_session(
    session_id: int,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> FeedbackSession:
    """Return a session with its questions and every response.

    Raises:
        SessionNotFoundError(404), OwnershipError(403)
    """
    get_owned_session(db, session_id, admin_id)

    return db.execute(
        select(FeedbackSession)
        .where(FeedbackSession.id == session_id)
        .options(
            selectinload(FeedbackSession.admin),
            selectinload(FeedbackSession.questions),
            selectinload(FeedbackSession.responses)
            .selectinload(FeedbackResponse.answers)
            .selectinload(Answer.question),
        )
    ).scalar_one()


@router.get("/{session_id}/share", response_model=ShareLinks)
def get_share_links(
    session_id: int,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> ShareLinks:
    """Return the public form link and QR image link for a session."""
    session = get_owned_session(db, session_id, admin_id)
    builder = ShareLinkBuilder()
    return ShareLinks(
        session_id=session.id,
        feedback_url=builder.feedback_url(session.id),
        qr_code_url=builder.qr_code_url(session.id),
    )
