"""FeedbackResponse and Answer models for submitted feedback.

This module defines the FeedbackResponse model, one respondent's complete
submission for a session, and the Answer model holding the value given to
each question within it.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import (
    Index,
    Text,
    Integer,
    Boolean,
    DateTime,
    ForeignKey,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_app.models.database import Base


class FeedbackResponse(Base):
    """Model for one respondent's submission.

    Responses are anonymous and immutable. They are deleted together with
    their session (CASCADE), and their answers with them.

    Attributes:
        id: Primary key
        session_id: Foreign key to sessions table
        created_at: When the feedback was submitted
        session: Relationship to the parent FeedbackSession
        answers: Answers contained in this submission
    """

    __tablename__ = "feedback_responses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    session_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Foreign key to sessions table"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the feedback was submitted"
    )

    session: Mapped["FeedbackSession"] = relationship(
        "FeedbackSession",
        back_populates="responses",
    )

    answers: Mapped[list["Answer"]] = relationship(
        "Answer",
        back_populates="feedback",
        cascade="all, delete-orphan",
        order_by="Answer.id",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<FeedbackResponse(id={self.id}, session_id={self.session_id})>"


class Answer(Base):
    """Model for the value given to one question in one submission.

    Exactly one of selected_option, rating and response_text is populated,
    chosen by the question's type (YES_NO, RATING, TEXT respectively).

    Attributes:
        id: Primary key
        question_id: Foreign key to questions table
        feedback_id: Foreign key to feedback_responses table
        selected_option: Answer to a YES_NO question
        rating: Answer to a RATING question
        response_text: Answer to a TEXT question
        question: Relationship to the answered Question
        feedback: Relationship to the parent FeedbackResponse
    """

    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("questions.id"),
        nullable=False,
        comment="Foreign key to questions table"
    )
    feedback_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("feedback_responses.id", ondelete="CASCADE"),
        nullable=False,
        comment="Foreign key to feedback_responses table"
    )

    # Value fields, one per question type
    selected_option: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    response_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    question: Mapped["Question"] = relationship("Question", back_populates="answers")
    feedback: Mapped["FeedbackResponse"] = relationship(
        "FeedbackResponse",
        back_populates="answers",
    )

    __table_args__ = (
        Index("idx_answers_question_id", "question_id"),
        Index("idx_answers_feedback_id", "feedback_id"),
    )

    @property
    def value(self) -> Any:
        """Whichever value field is populated, or None."""
        if self.selected_option is not None:
            return self.selected_option
        if self.rating is not None:
            return self.rating
        return self.response_text

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Answer(id={self.id}, "
            f"question_id={self.question_id}, "
            f"feedback_id={self.feedback_id})>"
        )
