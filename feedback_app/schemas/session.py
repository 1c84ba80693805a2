"""Pydantic schemas for feedback sessions and their questions."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from feedback_app.schemas.auth import AdminSummary
from feedback_app.schemas.base import CamelModel


class SessionCreate(CamelModel):
    """Request body for creating a session.

    ``questions`` entries are raw objects; they are checked by the question
    validator so that malformed questions fail with a question-specific
    message.

    Example:
        {
            "title": "Spring meetup",
            "description": "Tell us how it went",
            "date": "2025-04-12",
            "questions": [
                {"text": "Would you come again?", "type": "yes_no"},
                {"text": "Rate the venue", "type": "RATING", "isRequired": false}
            ]
        }
    """

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    date: datetime
    questions: Optional[List[Dict[str, Any]]] = None

    @field_validator("date", mode="before")
    @classmethod
    def accept_plain_dates(cls, v: Any) -> Any:
        """Accept 'YYYY-MM-DD' as midnight of that day."""
        if isinstance(v, str) and len(v.strip()) == 10:
            return f"{v.strip()}T00:00:00"
        return v


class QuestionOut(CamelModel):
    """A question as stored."""

    id: int
    text: str
    type: str
    is_required: bool
    session_id: int


class PublicQuestionOut(QuestionOut):
    """A question as shown on the public feedback form."""

    options: Optional[List[Union[str, int]]] = None


class SessionOut(CamelModel):
    """A session with its questions (creation response)."""

    id: int
    title: str
    description: str
    date: datetime
    admin_id: int
    created_at: Optional[datetime] = None
    questions: List[QuestionOut] = []


class SessionListItem(CamelModel):
    """A session row in listings, with owner summary and counts."""

    id: int
    title: str
    description: str
    date: datetime
    admin_id: int
    created_at: Optional[datetime] = None
    admin: AdminSummary
    question_count: int
    response_count: int


class AnswerOut(CamelModel):
    """An answer inside a feedback response, with its question."""

    id: int
    question_id: int
    feedback_id: int
    selected_option: Optional[bool] = None
    rating: Optional[int] = None
    response_text: Optional[str] = None
    value: Any = None
    question: QuestionOut


class FeedbackResponseOut(CamelModel):
    """A full feedback response."""

    id: int
    session_id: int
    created_at: Optional[datetime] = None
    answers: List[AnswerOut] = []


class SessionDetail(SessionOut):
    """A session with owner, questions and every response."""

    admin: AdminSummary
    responses: List[FeedbackResponseOut] = []


class SessionCreated(CamelModel):
    """Response to session creation."""

    message: str
    session: SessionOut


class QuestionsAdded(CamelModel):
    """Response to bulk question addition."""

    message: str
    questions: List[QuestionOut]


class ShareLinks(CamelModel):
    """Where respondents open a session's feedback form."""

    session_id: int
    feedback_url: str
    qr_code_url: str
