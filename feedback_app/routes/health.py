"""Liveness probe used by load balancers and deploy checks."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from feedback_app.models.database import get_db
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(db: Session = Depends(get_db)) -> dict:
    """Report whether the service can reach the feedback store.

    Returns:
        dict: ``{"status": "healthy", "database": "connected"}``

    Raises:
        HTTPException(503): If a trivial query against the store fails
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Feedback store unreachable: {e}")
        raise HTTPException(status_code=503, detail="Feedback store unavailable")

    return {"status": "healthy", "database": "connected"}
