"""Contacted model for follow-up contact requests.

This module defines the Contacted model which records respondents who asked
to be contacted after giving feedback on a session.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    text,
    select,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, Session

from feedback_app.models.database import Base


class Contacted(Base):
    """Model for a respondent's request to be contacted.

    The owning admin is copied from the session when the row is written so
    an admin's inbox can be listed without joining through sessions. A given
    email may contact each session at most once.

    Attributes:
        id: Primary key
        session_id: Session the request was left on
        admin_id: Owner of that session at write time
        name: Respondent's name
        email: Respondent's email (lower-cased)
        mobile: Respondent's phone number
        description: What the respondent wants to discuss
        created_at: When the request was left
    """

    __tablename__ = "contacted"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    session_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    admin_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("admins.id"),
        nullable=False,
        index=True,
        comment="Denormalized from the session's owner"
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    mobile: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    session: Mapped["FeedbackSession"] = relationship("FeedbackSession")

    __table_args__ = (
        UniqueConstraint("session_id", "email", name="uq_contacted_session_email"),
    )

    @classmethod
    def has_contacted(cls, db: Session, session_id: int, email: str) -> bool:
        """Check if an email already left a contact request for a session.

        Args:
            db: Database session
            session_id: Session to check
            email: Normalized email to check

        Returns:
            bool: True if a request exists, False otherwise
        """
        result = db.execute(
            select(cls.id).where(cls.session_id == session_id, cls.email == email)
        ).first()
        return result is not None

    @classmethod
    def list_for_admin(cls, db: Session, admin_id: int) -> list["Contacted"]:
        """List contact requests addressed to an admin, newest first."""
        return list(
            db.execute(
                select(cls)
                .where(cls.admin_id == admin_id)
                .order_by(cls.created_at.desc(), cls.id.desc())
            ).scalars()
        )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Contacted(id={self.id}, "
            f"session_id={self.session_id}, "
            f"admin_id={self.admin_id})>"
        )
