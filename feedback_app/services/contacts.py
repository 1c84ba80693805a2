"""Contact request intake with per-session email deduplication."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from feedback_app.exceptions import AlreadyContactedError
from feedback_app.models.contacted import Contacted
from feedback_app.schemas.feedback import ContactSubmission
from feedback_app.services.ownership import get_session_or_404
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)


class ContactDedupGate:
    """Service accepting at most one contact request per (session, email)."""

    def __init__(self, db: Session):
        """Initialize gate.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def submit_contact(self, session_id: int, submission: ContactSubmission) -> Contacted:
        """Record a contact request for a session.

        The session's owner is copied onto the row. A duplicate email for
        the same session is refused, including one that slips past the
        lookup and trips the unique constraint.

        Args:
            session_id: Session the request is left on
            submission: Contact details (email already normalized)

        Returns:
            Contacted: The stored request

        Raises:
            SessionNotFoundError: If the session does not exist
            AlreadyContactedError: If this email already contacted the session
        """
        session = get_session_or_404(self.db, session_id)

        if Contacted.has_contacted(self.db, session.id, submission.email):
            logger.info(
                f"Duplicate contact request for session {session.id}",
                extra={"session_id": session.id},
            )
            raise AlreadyContactedError()

        contacted = Contacted(
            session_id=session.id,
            admin_id=session.admin_id,
            name=submission.name,
            email=submission.email,
            mobile=submission.mobile,
            description=submission.description,
        )
        self.db.add(contacted)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(
                f"Concurrent duplicate contact request for session {session.id}",
                extra={"session_id": session.id},
            )
            raise AlreadyContactedError()

        self.db.refresh(contacted)
        logger.info(
            f"Stored contact request {contacted.id} for admin {session.admin_id}",
            extra={"session_id": session.id, "admin_id": session.admin_id},
        )
        return contacted
