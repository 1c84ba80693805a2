"""Admin model for accounts that own feedback sessions."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Text, DateTime, select, text
from sqlalchemy.orm import Mapped, mapped_column, relationship, Session

from feedback_app.models.database import Base


class Admin(Base):
    """An administrator who creates sessions and reads their analytics.

    Attributes:
        id: Primary key
        name: Display name
        email: Login email (unique)
        password_hash: passlib hash of the password
        mobile_number: Optional contact number
        bio: Optional free-text biography
        created_at: When the account was registered
        updated_at: Last profile or password change
        sessions: Feedback sessions owned by this admin
    """

    __tablename__ = "admins"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
        comment="Login email, unique across admins"
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="passlib hash, never the plaintext password"
    )
    mobile_number: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    sessions: Mapped[list["FeedbackSession"]] = relationship(
        "FeedbackSession",
        back_populates="admin",
    )

    @classmethod
    def get_by_email(cls, db: Session, email: str) -> Optional["Admin"]:
        """Look up an admin by login email.

        Args:
            db: Database session
            email: Email to look up

        Returns:
            The matching admin, or None
        """
        return db.execute(
            select(cls).where(cls.email == email)
        ).scalar_one_or_none()

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Admin(id={self.id}, email={self.email})>"
