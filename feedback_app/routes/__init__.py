"""Routes package for FastAPI endpoints.

This package contains all API route modules for the Session Feedback Service.
"""

from feedback_app.routes import analytics, auth, contact, feedback, health, questions, sessions

__all__ = ["analytics", "auth", "contact", "feedback", "health", "questions", "sessions"]
