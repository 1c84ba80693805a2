"""FeedbackSession model for admin-owned feedback events.

This module defines the FeedbackSession model: an event with a title,
description and date, owning the questions respondents answer and the
responses they submit.
"""

from datetime import datetime

from sqlalchemy import (
    Index,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from feedback_app.models.database import Base


class FeedbackSession(Base):
    """Model for a feedback-collection session.

    The owning admin is fixed at creation. Questions and responses are
    removed together with the session (CASCADE).

    Attributes:
        id: Primary key
        title: Short session title
        description: What the session is about
        date: When the event takes place
        admin_id: Foreign key to the owning admin
        created_at: When the session was created
        admin: Relationship to the owning Admin
        questions: Questions asked in this session, in creation order
        responses: Feedback responses submitted for this session
    """

    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the event takes place"
    )

    # Owner (immutable after creation)
    admin_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("admins.id"),
        nullable=False,
        comment="Foreign key to the owning admin"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    admin: Mapped["Admin"] = relationship("Admin", back_populates="sessions")

    questions: Mapped[list["Question"]] = relationship(
        "Question",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="Question.id",
    )

    responses: Mapped[list["FeedbackResponse"]] = relationship(
        "FeedbackResponse",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="FeedbackResponse.id",
    )

    __table_args__ = (
        # Index for listing an admin's sessions
        Index("idx_sessions_admin_id", "admin_id"),
        # Index for newest-first listings
        Index("idx_sessions_created_at", "created_at"),
    )

    def is_owned_by(self, admin_id: int) -> bool:
        """Check whether the given admin owns this session."""
        return self.admin_id == admin_id

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<FeedbackSession(id={self.id}, "
            f"title={self.title!r}, "
            f"admin_id={self.admin_id})>"
        )
