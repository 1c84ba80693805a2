"""Pydantic schemas for request and response validation.

This package contains all Pydantic models for the JSON API.
"""

from feedback_app.schemas.auth import (
    AdminRegister,
    AdminLogin,
    PasswordChange,
    ProfileUpdate,
    AdminOut,
    AdminSummary,
    AuthResponse,
    MessageResponse,
)
from feedback_app.schemas.session import (
    SessionCreate,
    QuestionOut,
    PublicQuestionOut,
    SessionOut,
    SessionListItem,
    SessionDetail,
    SessionCreated,
    QuestionsAdded,
    AnswerOut,
    FeedbackResponseOut,
    ShareLinks,
)
from feedback_app.schemas.feedback import (
    AnswerSubmission,
    FeedbackSubmission,
    FeedbackAccepted,
    ContactSubmission,
    ContactOut,
)
from feedback_app.schemas.analytics import (
    QuestionAnalyticsOut,
    QuestionAnalyticsReport,
    SessionAnalyticsReport,
)

__all__ = [
    "AdminRegister",
    "AdminLogin",
    "PasswordChange",
    "ProfileUpdate",
    "AdminOut",
    "AdminSummary",
    "AuthResponse",
    "MessageResponse",
    "SessionCreate",
    "QuestionOut",
    "PublicQuestionOut",
    "SessionOut",
    "SessionListItem",
    "SessionDetail",
    "SessionCreated",
    "QuestionsAdded",
    "AnswerOut",
    "FeedbackResponseOut",
    "ShareLinks",
    "AnswerSubmission",
    "FeedbackSubmission",
    "FeedbackAccepted",
    "ContactSubmission",
    "ContactOut",
    "QuestionAnalyticsOut",
    "QuestionAnalyticsReport",
    "SessionAnalyticsReport",
]
