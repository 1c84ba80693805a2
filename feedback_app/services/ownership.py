"""Session lookup with ownership enforcement."""

from sqlalchemy.orm import Session

from feedback_app.exceptions import OwnershipError, SessionNotFoundError
from feedback_app.models.session import FeedbackSession
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)


def get_session_or_404(db: Session, session_id: int) -> FeedbackSession:
    """Load a session or raise SessionNotFoundError."""
    session = db.get(FeedbackSession, session_id)
    if session is None:
        raise SessionNotFoundError()
    return session


def get_owned_session(db: Session, session_id: int, admin_id: int) -> FeedbackSession:
    """Load a session that must belong to ``admin_id``.

    Existence is checked before ownership, so a missing session is always
    reported as 404 regardless of who asks.

    Raises:
        SessionNotFoundError: If the session does not exist
        OwnershipError: If another admin owns it
    """
    session = get_session_or_404(db, session_id)
    if not session.is_owned_by(admin_id):
        logger.warning(
            f"Admin {admin_id} denied access to session {session_id}",
            extra={"admin_id": admin_id, "session_id": session_id},
        )
        raise OwnershipError("Unauthorized access to session")
    return session
