"""Question model and the closed set of question types."""

from enum import Enum

from sqlalchemy import Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_app.models.database import Base


class QuestionType(str, Enum):
    """Valid question types. The type selects which Answer field is used."""
    TEXT = "TEXT"
    YES_NO = "YES_NO"
    RATING = "RATING"


class Question(Base):
    """A prompt attached to exactly one feedback session.

    The type is fixed at creation. It is stored as plain text so a row with
    an unrecognized type can still be read (analytics reports it as
    unsupported instead of failing).

    Attributes:
        id: Primary key
        text: Prompt shown to respondents
        type: One of QuestionType's values
        is_required: Whether every submission must answer it
        session_id: Foreign key to the owning session
        session: Relationship to the owning FeedbackSession
        answers: Answers given to this question
    """

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    text: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="TEXT, YES_NO or RATING"
    )
    is_required: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    session_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    session: Mapped["FeedbackSession"] = relationship(
        "FeedbackSession",
        back_populates="questions",
    )

    answers: Mapped[list["Answer"]] = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Answer.id",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Question(id={self.id}, "
            f"session_id={self.session_id}, "
            f"type={self.type}, "
            f"is_required={self.is_required})>"
        )
