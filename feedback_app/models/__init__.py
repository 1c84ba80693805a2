"""Database models and session management.

This package contains all SQLAlchemy ORM models and database utilities.
"""

from feedback_app.models.database import Base, engine, SessionLocal, get_db, unit_of_work
from feedback_app.models.admin import Admin
from feedback_app.models.session import FeedbackSession
from feedback_app.models.question import Question, QuestionType
from feedback_app.models.response import FeedbackResponse, Answer
from feedback_app.models.contacted import Contacted

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "unit_of_work",
    "Admin",
    "FeedbackSession",
    "Question",
    "QuestionType",
    "FeedbackResponse",
    "Answer",
    "Contacted",
]
