"""Feedback submission engine.

This module validates a respondent's answers against a session's questions
and stores the submission, one FeedbackResponse plus one Answer per supplied
answer, in a single unit of work.
"""

import math
from numbers import Real
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from feedback_app.exceptions import (
    InternalError,
    MissingRequiredAnswerError,
    SessionNotFoundError,
    TypeMismatchError,
    UnknownQuestionError,
    ValidationError,
)
from feedback_app.models.database import unit_of_work
from feedback_app.models.question import Question, QuestionType
from feedback_app.models.response import Answer, FeedbackResponse
from feedback_app.models.session import FeedbackSession
from feedback_app.schemas.feedback import AnswerSubmission
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)

# Range of the 32-bit Answer.rating column
RATING_MIN = -(2 ** 31)
RATING_MAX = 2 ** 31 - 1


def coerce_rating(value: Any) -> Optional[int]:
    """Convert a submitted rating to an integer.

    Accepts integers, integral floats (``4.0``) and numeric strings without
    a fractional part (``"4"``, ``" 4.0 "``). Booleans are not ratings, and
    neither are integers the rating column cannot hold.

    Args:
        value: Raw submitted value

    Returns:
        The integer rating, or None if the value is not a storable integer
    """
    rating = _to_int(value)
    if rating is None or not RATING_MIN <= rating <= RATING_MAX:
        return None
    return rating


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            return int(stripped)
        except ValueError:
            try:
                value = float(stripped)
            except ValueError:
                return None
    if isinstance(value, Real):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return int(number)
    return None


class FeedbackSubmissionEngine:
    """Service validating and persisting feedback submissions."""

    def __init__(self, db: Session):
        """Initialize submission engine.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def submit(self, session_id: int, answers: Sequence[AnswerSubmission]) -> FeedbackResponse:
        """Validate and store one respondent's answers.

        Flow:
        1. Load the session and its questions
        2. Require an answer for every required question
        3. Type-check every supplied answer against its question
        4. Store the response and its answers atomically

        Args:
            session_id: Session the feedback is for
            answers: Submitted ``{questionId, value}`` pairs

        Returns:
            FeedbackResponse: The stored response

        Raises:
            SessionNotFoundError: If the session does not exist
            ValidationError: If no answers were supplied
            MissingRequiredAnswerError: If a required question is unanswered
            UnknownQuestionError: If an answer names a question outside the session
            TypeMismatchError: If a value does not fit its question's type
            InternalError: If the store fails; nothing is written

        Example:
            >>> engine = FeedbackSubmissionEngine(db)
            >>> response = engine.submit(7, [AnswerSubmission(question_id=3, value=True)])
            >>> response.id
            12
        """
        session = self.db.execute(
            select(FeedbackSession)
            .where(FeedbackSession.id == session_id)
            .options(selectinload(FeedbackSession.questions))
        ).scalar_one_or_none()

        if session is None:
            raise SessionNotFoundError()

        if not answers:
            raise ValidationError("Answers array is required and cannot be empty")

        prepared = self.validate_answers(session.questions, answers)

        try:
            with unit_of_work(self.db):
                response = FeedbackResponse(session_id=session.id)
                self.db.add(response)
                self.db.flush()

                for question, fields in prepared:
                    self.db.add(Answer(
                        question_id=question.id,
                        feedback_id=response.id,
                        **fields,
                    ))
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to store feedback for session {session.id}: {e}",
                extra={"session_id": session.id},
            )
            raise InternalError("Failed to submit feedback") from e

        logger.info(
            f"Stored feedback response {response.id} for session {session.id} "
            f"with {len(prepared)} answer(s)",
            extra={"session_id": session.id},
        )
        return response

    def validate_answers(
        self,
        questions: Sequence[Question],
        answers: Sequence[AnswerSubmission],
    ) -> List[Tuple[Question, Dict[str, Any]]]:
        """Check answers against the session's questions.

        Args:
            questions: Every question of the session
            answers: Submitted answers

        Returns:
            (question, answer column values) for each submitted answer, in order

        Raises:
            MissingRequiredAnswerError, UnknownQuestionError, TypeMismatchError
        """
        questions_by_id = {q.id: q for q in questions}
        answered_ids = {a.question_id for a in answers}

        for question in questions:
            if question.is_required and question.id not in answered_ids:
                raise MissingRequiredAnswerError(question.id, question.text)

        prepared = []
        for answer in answers:
            question = questions_by_id.get(answer.question_id)
            if question is None:
                raise UnknownQuestionError(answer.question_id)
            prepared.append((question, self.answer_fields(question, answer.value)))
        return prepared

    @staticmethod
    def answer_fields(question: Question, value: Any) -> Dict[str, Any]:
        """Map a value onto the Answer column selected by the question's type.

        Args:
            question: Question being answered
            value: Raw submitted value

        Returns:
            Dict with exactly one of selected_option, rating, response_text

        Raises:
            TypeMismatchError: If the value does not fit the question's type
        """
        label = f"Answer for question '{question.text}' (ID: {question.id})"

        if question.type == QuestionType.YES_NO:
            if not isinstance(value, bool):
                raise TypeMismatchError(
                    f"{label} must be a boolean for YES_NO type.", question.id
                )
            return {"selected_option": value}

        if question.type == QuestionType.RATING:
            rating = coerce_rating(value)
            if rating is None:
                raise TypeMismatchError(
                    f"{label} must be an integer for RATING type.", question.id
                )
            return {"rating": rating}

        if question.type == QuestionType.TEXT:
            if not isinstance(value, str):
                raise TypeMismatchError(
                    f"{label} must be a string for TEXT type.", question.id
                )
            return {"response_text": value}

        logger.error(f"Question {question.id} has unsupported type {question.type!r}")
        raise TypeMismatchError(f"Unsupported question type: {question.type}", question.id)
