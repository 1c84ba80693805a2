"""Error taxonomy for the Session Feedback Service.

Services raise these exceptions; the handlers registered in ``main.py``
translate them into JSON ``{"message": ...}`` bodies with the status code
carried by each class.
"""

from typing import Optional


class FeedbackAppError(Exception):
    """Base class for all expected application errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FeedbackAppError):
    """Raised when request data is missing or malformed."""

    status_code = 400


class InvalidQuestionError(ValidationError):
    """Raised when a candidate question has no text or an unknown type."""
    pass


class MissingRequiredAnswerError(ValidationError):
    """Raised when a required question has no answer in a submission."""

    def __init__(self, question_id: int, question_text: str):
        super().__init__(f"Required question '{question_text}' was not answered.")
        self.question_id = question_id


class TypeMismatchError(ValidationError):
    """Raised when an answer value does not fit its question's type."""

    def __init__(self, message: str, question_id: Optional[int] = None):
        super().__init__(message)
        self.question_id = question_id


class UnknownQuestionError(TypeMismatchError):
    """Raised when an answer references a question outside the session."""

    def __init__(self, question_id):
        super().__init__(
            f"Question with ID {question_id} not found in session.",
            question_id=question_id,
        )


class AuthError(FeedbackAppError):
    """Raised when a request cannot be authenticated."""

    status_code = 401


class UnauthenticatedError(AuthError):
    """Raised when no bearer token accompanies an admin request."""

    def __init__(self, message: str = "Authentication token required"):
        super().__init__(message)


class InvalidTokenError(AuthError):
    """Raised when a bearer token fails signature or expiry checks."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when an email/password pair does not match."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class OwnershipError(FeedbackAppError):
    """Raised when an admin acts on a session owned by someone else."""

    status_code = 403


class NotFoundError(FeedbackAppError):
    """Raised when a session, question or admin does not exist."""

    status_code = 404


class SessionNotFoundError(NotFoundError):
    """Raised when the referenced feedback session does not exist."""

    def __init__(self, message: str = "Session not found"):
        super().__init__(message)


class ConflictError(FeedbackAppError):
    """Raised when a resource would be duplicated."""

    status_code = 409


class AlreadyContactedError(ConflictError):
    """Raised when an email already left a contact request for a session.

    Reported as 400 so the client shows an "already contacted" notice.
    """

    status_code = 400

    def __init__(self, message: str = "You have already contacted us."):
        super().__init__(message)


class InternalError(FeedbackAppError):
    """Raised when the store fails in a way the caller cannot fix."""

    status_code = 500
