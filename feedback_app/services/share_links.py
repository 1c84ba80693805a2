"""Public links for distributing a session's feedback form.

The QR image itself is rendered by a third-party service; only its URL is
built here.
"""

from urllib.parse import urlencode

from feedback_app.config import get_settings


class ShareLinkBuilder:
    """Builds the feedback-form URL and the QR image URL encoding it."""

    def __init__(self, public_base_url: str = None, qr_service_url: str = None, qr_size: str = None):
        settings = get_settings()
        self.public_base_url = (public_base_url or settings.public_base_url).rstrip("/")
        self.qr_service_url = qr_service_url or settings.qr_code_service_url
        self.qr_size = qr_size or settings.qr_code_size

    def feedback_url(self, session_id: int) -> str:
        """URL where respondents open the form for a session."""
        return f"{self.public_base_url}/feedback/{session_id}"

    def qr_code_url(self, session_id: int) -> str:
        """Image URL of a QR code pointing at the session's form.

        Example:
            >>> ShareLinkBuilder("https://fb.example.com",
            ...                  "https://api.qrserver.com/v1/create-qr-code/",
            ...                  "200x200").qr_code_url(7)
            'https://api.qrserver.com/v1/create-qr-code/?size=200x200&data=https%3A%2F%2Ffb.example.com%2Ffeedback%2F7'
        """
        query = urlencode({"size": self.qr_size, "data": self.feedback_url(session_id)})
        return f"{self.qr_service_url}?{query}"
