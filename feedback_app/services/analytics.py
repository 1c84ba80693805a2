"""Analytics aggregation over a session's submitted answers.

Summaries are computed per question in a single pass over its answers. The
result is a plain data structure; the API renders it in two response shapes
(see ``feedback_app.schemas.analytics``).
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Union

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from feedback_app.models.question import Question, QuestionType
from feedback_app.models.response import Answer, FeedbackResponse
from feedback_app.services.ownership import get_owned_session
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)

RATING_BUCKETS = (1, 2, 3, 4, 5)
AVERAGE_PLACES = Decimal("0.01")


@dataclass
class YesNoSummary:
    yes: int
    no: int
    unanswered: int


@dataclass
class RatingSummary:
    """Rating statistics.

    Ratings outside 1..5 count toward average/min/max but have no bucket
    in the distribution.
    """
    average: Optional[float]
    min: Optional[int]
    max: Optional[int]
    distribution: Dict[int, int]


@dataclass
class TextSummary:
    count: int
    responses: List[str]


@dataclass
class UnsupportedSummary:
    message: str = "Unsupported question type"


Summary = Union[YesNoSummary, RatingSummary, TextSummary, UnsupportedSummary]


@dataclass
class QuestionAnalytics:
    """Summary of the answers to one question."""
    question_id: int
    text: str
    type: str
    total_answers: int
    analysis: Summary


@dataclass
class SessionAnalytics:
    """Summaries for every question of a session."""
    session_id: int
    session_title: str
    total_feedback_responses: int
    questions: List[QuestionAnalytics] = field(default_factory=list)

    @property
    def question_count(self) -> int:
        return len(self.questions)


class AnalyticsAggregator:
    """Service computing per-question analytics for a session."""

    def __init__(self, db: Session):
        """Initialize aggregator.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def aggregate(self, session_id: int, admin_id: int) -> SessionAnalytics:
        """Summarize every question of a session owned by ``admin_id``.

        Args:
            session_id: Session to summarize
            admin_id: Admin making the request

        Returns:
            SessionAnalytics with one entry per question, in id order

        Raises:
            SessionNotFoundError: If the session does not exist
            OwnershipError: If the admin does not own the session
        """
        session = get_owned_session(self.db, session_id, admin_id)

        questions = self.db.execute(
            select(Question)
            .where(Question.session_id == session.id)
            .options(selectinload(Question.answers))
            .order_by(Question.id)
        ).scalars().all()

        total_responses = self.db.execute(
            select(func.count(FeedbackResponse.id))
            .where(FeedbackResponse.session_id == session.id)
        ).scalar_one()

        result = SessionAnalytics(
            session_id=session.id,
            session_title=session.title,
            total_feedback_responses=total_responses,
            questions=[self.summarize_question(q, q.answers) for q in questions],
        )
        logger.info(
            f"Aggregated analytics for session {session.id}: "
            f"{result.question_count} questions, {total_responses} responses"
        )
        return result

    @staticmethod
    def summarize_question(question: Question, answers: Sequence[Answer]) -> QuestionAnalytics:
        """Summarize the answers given to one question.

        Args:
            question: The question
            answers: Every answer given to it

        Returns:
            QuestionAnalytics whose analysis matches the question type
        """
        if question.type == QuestionType.YES_NO:
            analysis = AnalyticsAggregator._summarize_yes_no(answers)
        elif question.type == QuestionType.RATING:
            analysis = AnalyticsAggregator._summarize_rating(answers)
        elif question.type == QuestionType.TEXT:
            analysis = AnalyticsAggregator._summarize_text(answers)
        else:
            logger.warning(f"Question {question.id} has unsupported type {question.type!r}")
            analysis = UnsupportedSummary()

        return QuestionAnalytics(
            question_id=question.id,
            text=question.text,
            type=question.type,
            total_answers=len(answers),
            analysis=analysis,
        )

    @staticmethod
    def _summarize_yes_no(answers: Sequence[Answer]) -> YesNoSummary:
        yes = sum(1 for a in answers if a.selected_option is True)
        no = sum(1 for a in answers if a.selected_option is False)
        return YesNoSummary(yes=yes, no=no, unanswered=len(answers) - yes - no)

    @staticmethod
    def _summarize_rating(answers: Sequence[Answer]) -> RatingSummary:
        ratings = [a.rating for a in answers if a.rating is not None]
        distribution = {bucket: 0 for bucket in RATING_BUCKETS}
        for rating in ratings:
            if rating in distribution:
                distribution[rating] += 1

        if not ratings:
            return RatingSummary(average=None, min=None, max=None, distribution=distribution)

        return RatingSummary(
            average=float(
                (Decimal(sum(ratings)) / len(ratings)).quantize(AVERAGE_PLACES, ROUND_HALF_UP)
            ),
            min=min(ratings),
            max=max(ratings),
            distribution=distribution,
        )

    @staticmethod
    def _summarize_text(answers: Sequence[Answer]) -> TextSummary:
        texts = [
            a.response_text for a in answers
            if a.response_text and a.response_text.strip()
        ]
        return TextSummary(count=len(texts), responses=texts)
