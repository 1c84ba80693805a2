"""Question endpoints.

Adding and removing questions requires owning the session; listing a
session's questions is public so the feedback form can render them.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from feedback_app.exceptions import NotFoundError, OwnershipError
from feedback_app.middleware.auth import get_current_admin_id
from feedback_app.models.database import get_db, unit_of_work
from feedback_app.models.question import Question, QuestionType
from feedback_app.models.response import Answer
from feedback_app.schemas.auth import MessageResponse
from feedback_app.schemas.session import PublicQuestionOut, QuestionOut, QuestionsAdded
from feedback_app.services.ownership import get_owned_session
from feedback_app.services.question_validator import QuestionValidator
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/questions")

# Choices shown on the public form per question type
QUESTION_OPTIONS = {
    QuestionType.YES_NO.value: ["Yes", "No"],
    QuestionType.RATING.value: [1, 2, 3, 4, 5],
}


@router.post("/{session_id}", response_model=QuestionsAdded, status_code=201)
def add_questions(
    session_id: int,
    payload: Any = Body(...),
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> QuestionsAdded:
    """Add one or more questions to a session the caller owns.

    The body may be a single question, a list, or ``{"questions": [...]}``.
    All questions are created in one transaction.

    Raises:
        SessionNotFoundError(404), OwnershipError(403), InvalidQuestionError(400)
    """
    session = get_owned_session(db, session_id, admin_id)
    drafts = QuestionValidator.validate_many(payload)

    questions = [draft.to_model(session_id=session.id) for draft in drafts]
    with unit_of_work(db):
        db.add_all(questions)

    logger.info(
        f"Added {len(questions)} question(s) to session {session.id}",
        extra={"admin_id": admin_id, "session_id": session.id},
    )
    return QuestionsAdded(
        message="Questions added successfully",
        questions=[QuestionOut.model_validate(q) for q in questions],
    )


@router.delete("/{question_id}", response_model=MessageResponse)
def delete_question(
    question_id: int,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Remove a question and every answer given to it.

    Raises:
        NotFoundError(404): If the question does not exist
        OwnershipError(403): If the caller does not own its session
    """
    question = db.get(Question, question_id)
    if question is None:
        raise NotFoundError("Question not found")

    if not question.session.is_owned_by(admin_id):
        logger.warning(
            f"Admin {admin_id} denied removing question {question_id}",
            extra={"admin_id": admin_id, "session_id": question.session_id},
        )
        raise OwnershipError(
            "Unauthorized: You can only remove questions from your own sessions"
        )

    with unit_of_work(db):
        # Answers reference the question, so they go first
        db.execute(delete(Answer).where(Answer.question_id == question_id))
        db.delete(question)

    logger.info(
        f"Removed question {question_id}",
        extra={"admin_id": admin_id, "session_id": question.session_id},
    )
    return MessageResponse(message="Question removed successfully")


@router.get("/{session_id}", response_model=List[PublicQuestionOut])
def list_questions(session_id: int, db: Session = Depends(get_db)) -> List[PublicQuestionOut]:
    """List a session's questions for the public feedback form.

    Raises:
        NotFoundError(404): If the session has no questions or does not exist
    """
    questions = db.execute(
        select(Question)
        .where(Question.session_id == session_id)
        .order_by(Question.id)
    ).scalars().all()

    if not questions:
        raise NotFoundError(
            "No questions found for this session or session does not exist"
        )

    return [
        PublicQuestionOut(
            id=q.id,
            text=q.text,
            type=q.type,
            is_required=q.is_required,
            session_id=q.session_id,
            options=QUESTION_OPTIONS.get(q.type),
        )
        for q in questions
    ]
