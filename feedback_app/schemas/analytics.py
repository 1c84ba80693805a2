"""Response shapes for session analytics.

Both shapes render the same ``SessionAnalytics`` value. The dashboard shape
(``QuestionAnalyticsReport``) carries rating averages as two-decimal strings;
the session shape (``SessionAnalyticsReport``) carries them as numbers.
"""

from dataclasses import asdict
from typing import Any, Dict, List

from feedback_app.schemas.base import CamelModel
from feedback_app.services.analytics import (
    QuestionAnalytics,
    RatingSummary,
    SessionAnalytics,
)


class QuestionAnalyticsOut(CamelModel):
    """Analytics for one question."""

    question_id: int
    text: str
    type: str
    total_answers: int
    analysis: Dict[str, Any]

    @classmethod
    def from_analytics(cls, item: QuestionAnalytics, average_as_text: bool = False) -> "QuestionAnalyticsOut":
        analysis = asdict(item.analysis)
        if (
            average_as_text
            and isinstance(item.analysis, RatingSummary)
            and item.analysis.average is not None
        ):
            analysis["average"] = f"{item.analysis.average:.2f}"
        return cls(
            question_id=item.question_id,
            text=item.text,
            type=item.type,
            total_answers=item.total_answers,
            analysis=analysis,
        )


class QuestionAnalyticsReport(CamelModel):
    """Served at ``/analytics/sessions/{id}/questions``."""

    session_id: int
    session_title: str
    question_count: int
    questions: List[QuestionAnalyticsOut]

    @classmethod
    def from_analytics(cls, analytics: SessionAnalytics) -> "QuestionAnalyticsReport":
        return cls(
            session_id=analytics.session_id,
            session_title=analytics.session_title,
            question_count=analytics.question_count,
            questions=[
                QuestionAnalyticsOut.from_analytics(q, average_as_text=True)
                for q in analytics.questions
            ],
        )


class SessionAnalyticsReport(CamelModel):
    """Served at ``/sessions/analytics/{id}``."""

    session_id: int
    session_title: str
    total_feedback_responses: int
    question_analytics: List[QuestionAnalyticsOut]

    @classmethod
    def from_analytics(cls, analytics: SessionAnalytics) -> "SessionAnalyticsReport":
        return cls(
            session_id=analytics.session_id,
            session_title=analytics.session_title,
            total_feedback_responses=analytics.total_feedback_responses,
            question_analytics=[
                QuestionAnalyticsOut.from_analytics(q) for q in analytics.questions
            ],
        )
