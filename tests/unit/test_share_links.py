"""Unit tests for share link generation."""

from urllib.parse import parse_qs, urlparse

from feedback_app.config import get_settings
from feedback_app.services.share_links import ShareLinkBuilder


class TestShareLinkBuilder:
    """Test suite for ShareLinkBuilder."""

    def test_feedback_url(self):
        builder = ShareLinkBuilder("https://fb.example.com/", "https://qr.example.com/make", "150x150")
        assert builder.feedback_url(7) == "https://fb.example.com/feedback/7"

    def test_qr_code_url_encodes_feedback_url(self):
        """Test that the QR link carries the size and the encoded form URL."""
        builder = ShareLinkBuilder("https://fb.example.com", "https://qr.example.com/make", "150x150")

        url = builder.qr_code_url(7)

        parsed = urlparse(url)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://qr.example.com/make"
        query = parse_qs(parsed.query)
        assert query["size"] == ["150x150"]
        assert query["data"] == ["https://fb.example.com/feedback/7"]
        assert "https%3A%2F%2Ffb.example.com%2Ffeedback%2F7" in url

    def test_defaults_come_from_settings(self):
        settings = get_settings()
        builder = ShareLinkBuilder()

        assert builder.feedback_url(3) == f"{settings.public_base_url}/feedback/3"
        assert builder.qr_code_url(3).startswith(f"{settings.qr_code_service_url}?")
        assert f"size={settings.qr_code_size}" in builder.qr_code_url(3)
