"""Pydantic schemas for public feedback and contact submissions."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import EmailStr, Field, field_validator

from feedback_app.schemas.base import CamelModel


class AnswerSubmission(CamelModel):
    """One answer in a feedback submission.

    ``value`` is kept exactly as sent (bool, number or string); it is
    type-checked against the question by the submission engine.
    """

    question_id: int
    value: Any = None


class FeedbackSubmission(CamelModel):
    """Request body for submitting feedback.

    Example:
        {
            "answers": [
                {"questionId": 1, "value": true},
                {"questionId": 2, "value": 4},
                {"questionId": 3, "value": "great"}
            ]
        }
    """

    answers: List[AnswerSubmission] = Field(default_factory=list)


class FeedbackAccepted(CamelModel):
    """Response to a successful feedback submission."""

    message: str
    feedback_response_id: int


class ContactSubmission(CamelModel):
    """Request body for leaving a follow-up contact request."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    mobile: Optional[str] = Field(None, max_length=32)
    description: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class ContactOut(CamelModel):
    """A stored contact request."""

    id: int
    session_id: int
    admin_id: int
    name: str
    email: str
    mobile: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
