"""Contact request endpoints (public)."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from feedback_app.models.contacted import Contacted
from feedback_app.models.database import get_db
from feedback_app.schemas.feedback import ContactOut, ContactSubmission
from feedback_app.services.contacts import ContactDedupGate

router = APIRouter(prefix="/contact")


@router.get("/{admin_id}", response_model=List[ContactOut])
def list_contacts(admin_id: int, db: Session = Depends(get_db)) -> List[Contacted]:
    """List contact requests addressed to an admin, newest first."""
    return Contacted.list_for_admin(db, admin_id)


@router.post("/{session_id}", response_model=ContactOut, status_code=201)
def submit_contact(
    session_id: int,
    payload: ContactSubmission,
    db: Session = Depends(get_db),
) -> Contacted:
    """Leave a follow-up contact request on a session.

    Raises:
        SessionNotFoundError(404): If the session does not exist
        AlreadyContactedError(400): If this email already contacted the session
    """
    return ContactDedupGate(db).submit_contact(session_id, payload)
