"""Admin account endpoints: registration, login, password and profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from feedback_app.exceptions import ConflictError, InvalidCredentialsError, NotFoundError
from feedback_app.middleware.auth import get_current_admin_id
from feedback_app.models.admin import Admin
from feedback_app.models.database import get_db
from feedback_app.schemas.auth import (
    AdminLogin,
    AdminOut,
    AdminRegister,
    AuthResponse,
    MessageResponse,
    PasswordChange,
    ProfileUpdate,
)
from feedback_app.services.security import (
    create_access_token,
    get_password_hash,
    verify_password,
)
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth")


def _get_admin_or_404(db: Session, admin_id: int) -> Admin:
    admin = db.get(Admin, admin_id)
    if admin is None:
        raise NotFoundError("Admin not found")
    return admin


@router.post("/register-admin", response_model=AuthResponse, status_code=201)
def register_admin(payload: AdminRegister, db: Session = Depends(get_db)) -> AuthResponse:
    """Create an admin account and return a token for it.

    Raises:
        ConflictError(409): If the email is already registered
    """
    if Admin.get_by_email(db, payload.email) is not None:
        raise ConflictError("Admin with this email already exists")

    admin = Admin(
        name=payload.name,
        email=payload.email,
        password_hash=get_password_hash(payload.password),
        mobile_number=payload.mobile_number,
        bio=payload.bio,
    )
    db.add(admin)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Admin with this email already exists")
    db.refresh(admin)

    logger.info(f"Registered admin {admin.id}", extra={"admin_id": admin.id})
    return AuthResponse(
        message="Admin registered successfully",
        token=create_access_token(admin.id, admin.email),
        admin=AdminOut.model_validate(admin),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: AdminLogin, db: Session = Depends(get_db)) -> AuthResponse:
    """Authenticate with email and password.

    Raises:
        InvalidCredentialsError(401): For an unknown email or a wrong password
    """
    admin = Admin.get_by_email(db, payload.email)
    if admin is None or not verify_password(payload.password, admin.password_hash):
        logger.warning("Failed login attempt")
        raise InvalidCredentialsError()

    logger.info(f"Admin {admin.id} logged in", extra={"admin_id": admin.id})
    return AuthResponse(
        message="Login successful",
        token=create_access_token(admin.id, admin.email),
        admin=AdminOut.model_validate(admin),
    )


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Replace the authenticated admin's password.

    Raises:
        NotFoundError(404): If the admin no longer exists
        InvalidCredentialsError(401): If the old password is wrong
    """
    admin = _get_admin_or_404(db, admin_id)
    if not verify_password(payload.old_password, admin.password_hash):
        logger.warning(f"Wrong old password for admin {admin_id}", extra={"admin_id": admin_id})
        raise InvalidCredentialsError("Invalid old password")

    admin.password_hash = get_password_hash(payload.new_password)
    db.commit()

    logger.info(f"Password changed for admin {admin_id}", extra={"admin_id": admin_id})
    return MessageResponse(message="Password changed successfully")


@router.get("/profile", response_model=AdminOut)
def get_profile(
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> Admin:
    """Return the authenticated admin's profile."""
    return _get_admin_or_404(db, admin_id)


@router.put("/profile", response_model=AdminOut)
def update_profile(
    payload: ProfileUpdate,
    admin_id: int = Depends(get_current_admin_id),
    db: Session = Depends(get_db),
) -> Admin:
    """Update the authenticated admin's profile.

    Raises:
        NotFoundError(404): If the admin no longer exists
        ConflictError(409): If the new email belongs to another admin
    """
    admin = _get_admin_or_404(db, admin_id)

    other = Admin.get_by_email(db, payload.email)
    if other is not None and other.id != admin.id:
        raise ConflictError("Admin with this email already exists")

    admin.name = payload.name
    admin.email = payload.email
    admin.mobile_number = payload.mobile_number
    admin.bio = payload.bio
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Admin with this email already exists")
    db.refresh(admin)

    logger.info(f"Profile updated for admin {admin_id}", extra={"admin_id": admin_id})
    return admin
