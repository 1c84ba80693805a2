"""Bearer token verification for admin routes.

This module provides the FastAPI dependency that authenticates admin
requests by verifying the JWT carried in the Authorization header.

Security: All admin endpoints MUST depend on ``get_current_admin_id`` so
that no side effect happens before the caller is identified.
"""

from typing import Optional

from fastapi import Request

from feedback_app.exceptions import InvalidTokenError, UnauthenticatedError
from feedback_app.services.security import decode_access_token
from feedback_app.logging_config import get_logger


logger = get_logger(__name__)


class BearerTokenVerifier:
    """Service for extracting and verifying admin bearer tokens.

    Security Notes:
        - NEVER log token values or the signing secret
        - Log failed verifications with client IP
    """

    @staticmethod
    def extract_token(authorization: Optional[str]) -> Optional[str]:
        """Pull the token out of an ``Authorization: Bearer <token>`` header.

        Args:
            authorization: Raw header value, possibly missing

        Returns:
            The token, or None if the header is absent or not a bearer header

        Example:
            >>> BearerTokenVerifier.extract_token("Bearer abc.def.ghi")
            'abc.def.ghi'
        """
        if not authorization:
            return None
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None
        return parts[1]

    def verify_request(self, request: Request) -> int:
        """Authenticate a request and return the admin ID it carries.

        Args:
            request: FastAPI request object

        Returns:
            The authenticated admin's ID

        Raises:
            UnauthenticatedError: If no bearer token is present
            InvalidTokenError: If the token fails signature or expiry checks
        """
        client_ip = request.client.host if request.client else "unknown"

        token = self.extract_token(request.headers.get("Authorization"))
        if token is None:
            logger.warning(
                f"Missing bearer token from IP: {client_ip}",
                extra={"client_ip": client_ip}
            )
            raise UnauthenticatedError()

        try:
            admin_id = decode_access_token(token)
        except InvalidTokenError:
            logger.warning(
                f"Invalid or expired token from IP: {client_ip}",
                extra={"client_ip": client_ip}
            )
            raise

        logger.debug(f"Authenticated admin {admin_id}")
        return admin_id


# Dependency function for FastAPI routes
async def get_current_admin_id(request: Request) -> int:
    """FastAPI dependency resolving the authenticated admin's ID.

    Usage:
        @router.get("/profile")
        def profile(admin_id: int = Depends(get_current_admin_id)):
            ...

    Raises:
        UnauthenticatedError(401): If no token is present
        InvalidTokenError(401): If the token is invalid or expired
    """
    admin_id = BearerTokenVerifier().verify_request(request)
    request.state.admin_id = admin_id
    return admin_id
