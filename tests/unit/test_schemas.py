"""Unit tests for request and response schemas."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from feedback_app.schemas.analytics import QuestionAnalyticsReport, SessionAnalyticsReport
from feedback_app.schemas.auth import AdminOut, AdminRegister, ProfileUpdate
from feedback_app.schemas.feedback import ContactSubmission, FeedbackSubmission
from feedback_app.schemas.session import SessionCreate
from feedback_app.services.analytics import (
    QuestionAnalytics,
    RatingSummary,
    SessionAnalytics,
    YesNoSummary,
)


class TestAuthSchemas:
    """Test suite for admin account schemas."""

    def test_register_accepts_camel_case(self):
        payload = AdminRegister.model_validate({
            "name": "Ada Lovelace",
            "email": "Ada@Example.com",
            "password": "s3cret",
            "mobileNumber": "+15551234567",
        })

        assert payload.email == "ada@example.com"
        assert payload.mobile_number == "+15551234567"
        assert payload.bio is None

    def test_register_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            AdminRegister(name="Ada", email="not-an-email", password="s3cret")

    def test_profile_requires_name(self):
        with pytest.raises(ValidationError):
            ProfileUpdate(name="", email="ada@example.com")

    def test_admin_out_serializes_camel_case(self):
        """Test that responses use camelCase keys and omit the hash."""
        out = AdminOut(id=1, name="Ada", email="ada@example.com", mobile_number="+1555")

        data = out.model_dump(by_alias=True)

        assert data["mobileNumber"] == "+1555"
        assert "passwordHash" not in data


class TestSessionCreate:
    """Test suite for session creation payloads."""

    def test_plain_date_is_midnight(self):
        payload = SessionCreate(title="Meetup", description="Monthly", date="2025-04-12")
        assert payload.date == datetime(2025, 4, 12, 0, 0)

    def test_iso_datetime(self):
        payload = SessionCreate(title="Meetup", description="Monthly", date="2025-04-12T18:30:00")
        assert payload.date.hour == 18

    def test_questions_are_passed_through_raw(self):
        """Test that question objects are left for the question validator."""
        payload = SessionCreate.model_validate({
            "title": "Meetup",
            "description": "Monthly",
            "date": "2025-04-12",
            "questions": [{"text": "Rate", "type": "whatever"}],
        })
        assert payload.questions == [{"text": "Rate", "type": "whatever"}]

    def test_title_required(self):
        with pytest.raises(ValidationError):
            SessionCreate(title="", description="Monthly", date="2025-04-12")


class TestFeedbackSchemas:
    """Test suite for public submission payloads."""

    def test_answer_values_keep_their_type(self):
        """Test that values are not coerced before the engine sees them."""
        payload = FeedbackSubmission.model_validate({
            "answers": [
                {"questionId": 1, "value": True},
                {"questionId": 2, "value": "4"},
                {"questionId": 3, "value": 3.5},
            ]
        })

        assert [a.value for a in payload.answers] == [True, "4", 3.5]
        assert payload.answers[0].question_id == 1

    def test_answers_default_to_empty(self):
        assert FeedbackSubmission.model_validate({}).answers == []

    def test_contact_email_lowercased(self):
        contact = ContactSubmission(name="Visitor", email="Visitor@Example.COM")
        assert contact.email == "visitor@example.com"

    def test_contact_requires_valid_email(self):
        with pytest.raises(ValidationError):
            ContactSubmission(name="Visitor", email="visitor-at-example")


class TestAnalyticsReports:
    """Test suite for the two analytics response shapes."""

    @pytest.fixture
    def analytics(self) -> SessionAnalytics:
        return SessionAnalytics(
            session_id=3,
            session_title="Spring meetup",
            total_feedback_responses=2,
            questions=[
                QuestionAnalytics(
                    question_id=10, text="Again?", type="YES_NO", total_answers=2,
                    analysis=YesNoSummary(yes=2, no=0, unanswered=0),
                ),
                QuestionAnalytics(
                    question_id=11, text="Rate", type="RATING", total_answers=2,
                    analysis=RatingSummary(
                        average=4.0, min=4, max=4,
                        distribution={1: 0, 2: 0, 3: 0, 4: 2, 5: 0},
                    ),
                ),
            ],
        )

    def test_dashboard_shape_formats_average(self, analytics):
        data = QuestionAnalyticsReport.from_analytics(analytics).model_dump(by_alias=True)

        assert data["sessionId"] == 3
        assert data["questionCount"] == 2
        assert data["questions"][0]["questionId"] == 10
        assert data["questions"][0]["analysis"] == {"yes": 2, "no": 0, "unanswered": 0}
        assert data["questions"][1]["analysis"]["average"] == "4.00"

    def test_session_shape_keeps_numeric_average(self, analytics):
        data = SessionAnalyticsReport.from_analytics(analytics).model_dump(by_alias=True)

        assert data["totalFeedbackResponses"] == 2
        assert data["questionAnalytics"][1]["analysis"]["average"] == 4.0
        assert data["questionAnalytics"][1]["totalAnswers"] == 2

    def test_null_average_stays_null(self, analytics):
        analytics.questions[1].analysis = RatingSummary(
            average=None, min=None, max=None, distribution={1: 0, 2: 0, 3: 0, 4: 0, 5: 0}
        )

        data = QuestionAnalyticsReport.from_analytics(analytics).model_dump(by_alias=True)

        assert data["questions"][1]["analysis"]["average"] is None
