"""Validation of candidate questions before they are stored.

Candidates arrive as raw JSON objects, either embedded in a session creation
request or posted on their own. Each must have non-empty text and one of the
supported types; ``isRequired`` defaults to true.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from feedback_app.exceptions import InvalidQuestionError
from feedback_app.models.question import Question, QuestionType
from feedback_app.logging_config import get_logger

logger = get_logger(__name__)

VALID_TYPES = [t.value for t in QuestionType]


@dataclass
class QuestionDraft:
    """A validated question, ready to be attached to a session.

    Attributes:
        text: Prompt text
        type: Normalized question type
        is_required: Whether submissions must answer it
    """
    text: str
    type: QuestionType
    is_required: bool = True

    def to_model(self, session_id: Optional[int] = None) -> Question:
        """Build the ORM row for this draft."""
        return Question(
            text=self.text,
            type=self.type.value,
            is_required=self.is_required,
            session_id=session_id,
        )


class QuestionValidator:
    """Service for validating candidate questions."""

    @staticmethod
    def validate(candidate: Any) -> QuestionDraft:
        """Validate one candidate question.

        Args:
            candidate: Raw object with ``text``, ``type`` and optional
                ``isRequired``

        Returns:
            QuestionDraft with the type upper-cased

        Raises:
            InvalidQuestionError: If text is missing or the type is unknown

        Example:
            >>> QuestionValidator.validate({"text": "Enjoyed it?", "type": "yes_no"})
            QuestionDraft(text='Enjoyed it?', type=<QuestionType.YES_NO: 'YES_NO'>, is_required=True)
        """
        if not isinstance(candidate, Mapping):
            raise InvalidQuestionError("Each question must be an object with text and type")

        text = candidate.get("text")
        raw_type = candidate.get("type")

        if not isinstance(text, str) or not text.strip() or not raw_type:
            raise InvalidQuestionError("Each question must have text and type")

        if not isinstance(raw_type, str) or raw_type.strip().upper() not in VALID_TYPES:
            raise InvalidQuestionError(
                f"Invalid question type: {raw_type}. Must be one of: {', '.join(VALID_TYPES)}"
            )

        is_required = candidate.get("isRequired", candidate.get("is_required"))
        if is_required is None:
            is_required = True
        elif not isinstance(is_required, bool):
            raise InvalidQuestionError("isRequired must be a boolean")

        return QuestionDraft(
            text=text.strip(),
            type=QuestionType(raw_type.strip().upper()),
            is_required=is_required,
        )

    @staticmethod
    def validate_many(candidates: Any) -> List[QuestionDraft]:
        """Validate a batch of candidate questions.

        Accepts a single object, a list of objects, or ``{"questions": [...]}``.
        The whole batch is rejected if any candidate is invalid.

        Args:
            candidates: Raw request payload

        Returns:
            One QuestionDraft per candidate, in order

        Raises:
            InvalidQuestionError: If the batch is empty or any candidate is invalid
        """
        if isinstance(candidates, Mapping) and "questions" in candidates:
            candidates = candidates["questions"]
        if candidates is None:
            candidates = []
        elif not isinstance(candidates, list):
            candidates = [candidates]

        if not candidates:
            raise InvalidQuestionError("At least one question is required")

        drafts = [QuestionValidator.validate(c) for c in candidates]
        logger.debug(f"Validated {len(drafts)} question(s)")
        return drafts
