"""Unit tests for the feedback submission engine."""

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import OperationalError

from feedback_app.exceptions import (
    InternalError,
    MissingRequiredAnswerError,
    SessionNotFoundError,
    TypeMismatchError,
    UnknownQuestionError,
    ValidationError,
)
from feedback_app.models.response import Answer, FeedbackResponse
from feedback_app.schemas.feedback import AnswerSubmission
from feedback_app.services.feedback_engine import (
    RATING_MAX,
    RATING_MIN,
    FeedbackSubmissionEngine,
    coerce_rating,
)


def _count(db_session, model) -> int:
    return db_session.execute(select(func.count()).select_from(model)).scalar_one()


class TestCoerceRating:
    """Test suite for rating coercion."""

    @pytest.mark.parametrize("value,expected", [
        (4, 4),
        (0, 0),
        (10, 10),
        (4.0, 4),
        ("4", 4),
        (" 5 ", 5),
        ("3.0", 3),
        (RATING_MAX, RATING_MAX),
        (RATING_MIN, RATING_MIN),
    ])
    def test_accepts_integers(self, value, expected):
        assert coerce_rating(value) == expected

    @pytest.mark.parametrize("value", [
        3.5, "3.5", "abc", "", None, True, False, float("nan"), float("inf"), [4], {"v": 4},
        RATING_MAX + 1, RATING_MIN - 1, 10 ** 20, str(10 ** 20), 1e20,
    ])
    def test_rejects_non_integers(self, value):
        assert coerce_rating(value) is None


class TestFeedbackSubmissionEngine:
    """Test suite for FeedbackSubmissionEngine.submit."""

    def _answers(self, session, yes_no=True, rating=4, text="great"):
        yes_no_q, rating_q, text_q = session.questions
        return [
            AnswerSubmission(question_id=yes_no_q.id, value=yes_no),
            AnswerSubmission(question_id=rating_q.id, value=rating),
            AnswerSubmission(question_id=text_q.id, value=text),
        ]

    def test_valid_submission_stores_response_and_answers(self, db_session, three_question_session):
        """Test that one response and one answer per question are stored."""
        engine = FeedbackSubmissionEngine(db_session)

        response = engine.submit(three_question_session.id, self._answers(three_question_session))

        assert response.id is not None
        assert response.session_id == three_question_session.id
        answers = db_session.execute(
            select(Answer).where(Answer.feedback_id == response.id).order_by(Answer.id)
        ).scalars().all()
        assert [a.value for a in answers] == [True, 4, "great"]
        assert answers[0].rating is None and answers[0].response_text is None
        assert answers[1].selected_option is None

    def test_rating_string_is_coerced(self, db_session, three_question_session):
        """Test that "4" is stored as the integer 4."""
        engine = FeedbackSubmissionEngine(db_session)

        response = engine.submit(
            three_question_session.id, self._answers(three_question_session, rating="4")
        )

        rating_q = three_question_session.questions[1]
        stored = db_session.execute(
            select(Answer.rating).where(
                Answer.feedback_id == response.id, Answer.question_id == rating_q.id
            )
        ).scalar_one()
        assert stored == 4

    def test_out_of_range_rating_is_stored(self, db_session, three_question_session):
        """Test that ratings outside 1..5 are accepted."""
        engine = FeedbackSubmissionEngine(db_session)

        engine.submit(three_question_session.id, self._answers(three_question_session, rating=10))

        assert _count(db_session, FeedbackResponse) == 1

    def test_missing_required_answer(self, db_session, three_question_session):
        """Test that leaving out a required question fails without writing."""
        engine = FeedbackSubmissionEngine(db_session)
        answers = self._answers(three_question_session)[:2]

        with pytest.raises(MissingRequiredAnswerError) as exc_info:
            engine.submit(three_question_session.id, answers)

        assert exc_info.value.message == "Required question 'Anything else?' was not answered."
        assert exc_info.value.question_id == three_question_session.questions[2].id
        assert _count(db_session, FeedbackResponse) == 0
        assert _count(db_session, Answer) == 0

    def test_optional_question_may_be_skipped(self, db_session, make_session, admin):
        """Test that optional questions need no answer."""
        session = make_session(admin, questions=[
            ("Rate the venue", "RATING", True),
            ("Anything else?", "TEXT", False),
        ])
        engine = FeedbackSubmissionEngine(db_session)

        response = engine.submit(
            session.id, [AnswerSubmission(question_id=session.questions[0].id, value=5)]
        )

        assert response.id is not None
        assert _count(db_session, Answer) == 1

    @pytest.mark.parametrize("value", ["yes", 1, 0, None, "true"])
    def test_yes_no_requires_boolean(self, db_session, three_question_session, value):
        """Test that YES_NO accepts only true or false."""
        engine = FeedbackSubmissionEngine(db_session)

        with pytest.raises(TypeMismatchError) as exc_info:
            engine.submit(
                three_question_session.id, self._answers(three_question_session, yes_no=value)
            )

        assert "must be a boolean for YES_NO type" in exc_info.value.message
        assert _count(db_session, FeedbackResponse) == 0

    @pytest.mark.parametrize("value", [3.5, "3.5", "four", True, None])
    def test_rating_requires_integer(self, db_session, three_question_session, value):
        """Test that RATING rejects fractions and non-numbers."""
        engine = FeedbackSubmissionEngine(db_session)

        with pytest.raises(TypeMismatchError) as exc_info:
            engine.submit(
                three_question_session.id, self._answers(three_question_session, rating=value)
            )

        assert "must be an integer for RATING type" in exc_info.value.message

    @pytest.mark.parametrize("value", [5, True, None, ["great"]])
    def test_text_requires_string(self, db_session, three_question_session, value):
        """Test that TEXT accepts only strings."""
        engine = FeedbackSubmissionEngine(db_session)

        with pytest.raises(TypeMismatchError) as exc_info:
            engine.submit(
                three_question_session.id, self._answers(three_question_session, text=value)
            )

        assert "must be a string for TEXT type" in exc_info.value.message

    def test_empty_text_is_accepted(self, db_session, three_question_session):
        """Test that an empty string still answers a TEXT question."""
        engine = FeedbackSubmissionEngine(db_session)

        response = engine.submit(
            three_question_session.id, self._answers(three_question_session, text="")
        )

        assert response.id is not None

    def test_unknown_question(self, db_session, three_question_session):
        """Test that answers must reference the session's questions."""
        engine = FeedbackSubmissionEngine(db_session)
        answers = self._answers(three_question_session)
        answers.append(AnswerSubmission(question_id=9999, value="extra"))

        with pytest.raises(UnknownQuestionError) as exc_info:
            engine.submit(three_question_session.id, answers)

        assert exc_info.value.status_code == 400
        assert _count(db_session, FeedbackResponse) == 0

    def test_question_from_another_session(self, db_session, three_question_session, make_session, admin):
        """Test that a question of a different session counts as unknown."""
        other = make_session(admin, questions=[("Other", "TEXT", False)])
        engine = FeedbackSubmissionEngine(db_session)
        answers = self._answers(three_question_session)
        answers.append(AnswerSubmission(question_id=other.questions[0].id, value="x"))

        with pytest.raises(UnknownQuestionError):
            engine.submit(three_question_session.id, answers)

    def test_empty_answers(self, db_session, three_question_session):
        """Test that an empty submission is rejected."""
        engine = FeedbackSubmissionEngine(db_session)

        with pytest.raises(ValidationError) as exc_info:
            engine.submit(three_question_session.id, [])

        assert exc_info.value.message == "Answers array is required and cannot be empty"

    def test_session_not_found(self, db_session):
        """Test that a missing session is reported before anything else."""
        engine = FeedbackSubmissionEngine(db_session)

        with pytest.raises(SessionNotFoundError):
            engine.submit(12345, [])

    def test_duplicate_answers_are_all_stored(self, db_session, make_session, admin):
        """Test that repeated answers to one question are each stored."""
        session = make_session(admin, questions=[("Rate", "RATING", True)])
        question_id = session.questions[0].id
        engine = FeedbackSubmissionEngine(db_session)

        engine.submit(session.id, [
            AnswerSubmission(question_id=question_id, value=2),
            AnswerSubmission(question_id=question_id, value=4),
        ])

        assert _count(db_session, Answer) == 2

    def test_rating_beyond_column_range(self, db_session, three_question_session):
        """Test that a rating too large to store is rejected before writing."""
        engine = FeedbackSubmissionEngine(db_session)

        with pytest.raises(TypeMismatchError) as exc_info:
            engine.submit(
                three_question_session.id, self._answers(three_question_session, rating=10 ** 20)
            )

        assert "must be an integer for RATING type" in exc_info.value.message
        assert _count(db_session, FeedbackResponse) == 0

    def test_failed_answer_insert_leaves_no_response(self, db_session, three_question_session):
        """Test that a store failure mid-submission rolls back the response row."""
        engine = FeedbackSubmissionEngine(db_session)

        def fail_insert(mapper, connection, target):
            raise OperationalError("INSERT INTO answers", {}, Exception("disk I/O error"))

        event.listen(Answer, "before_insert", fail_insert)
        try:
            with pytest.raises(InternalError) as exc_info:
                engine.submit(three_question_session.id, self._answers(three_question_session))
        finally:
            event.remove(Answer, "before_insert", fail_insert)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to submit feedback"
        assert _count(db_session, FeedbackResponse) == 0
        assert _count(db_session, Answer) == 0
