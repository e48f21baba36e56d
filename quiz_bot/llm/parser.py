import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

import pydantic

from quiz_bot.exceptions import ParseError
from quiz_bot.models import QUESTION_MODELS, Question, QuestionType

logger = logging.getLogger(__name__)

# First "[" up to the last "]" in the text
JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class RejectReason(str, Enum):
    NOT_AN_OBJECT = "not_an_object"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_FIELDS = "invalid_fields"


@dataclass(frozen=True)
class EntryResult:
    """Outcome of validating one raw entry: either a question or a reject reason."""

    question: Question | None = None
    reason: RejectReason | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.question is not None


def extract_json_array(text: str) -> list[Any]:
    """
    Find the bracketed array in free text and decode it.

    Raises:
        ParseError: No array in the text, or it is not valid JSON
    """
    match = JSON_ARRAY_RE.search(text or "")
    if not match:
        raise ParseError("Could not find JSON in response")

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ParseError("Failed to parse questions from API response") from e


def validate_entry(raw: Any, expected_type: QuestionType) -> EntryResult:
    """Check one decoded entry against the schema of the requested question type."""
    if not isinstance(raw, dict):
        return EntryResult(reason=RejectReason.NOT_AN_OBJECT, detail=type(raw).__name__)

    if raw.get("type") != expected_type.value:
        return EntryResult(reason=RejectReason.TYPE_MISMATCH, detail=repr(raw.get("type")))

    # Answers are the user's, never the model's
    data = {key: value for key, value in raw.items() if key != "userAnswer"}
    try:
        question = QUESTION_MODELS[expected_type].model_validate(data)
    except pydantic.ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        return EntryResult(reason=RejectReason.INVALID_FIELDS, detail=fields)

    return EntryResult(question=question)


def parse_questions(text: str, expected_type: QuestionType) -> list[Question]:
    """
    Parse LLM output into questions of the expected type.

    Malformed entries are dropped with a warning; only a missing or
    undecodable array is an error.

    Raises:
        ParseError: If no JSON array can be recovered from the text
    """
    entries = extract_json_array(text)

    valid = []
    for i, raw in enumerate(entries):
        result = validate_entry(raw, expected_type)
        if result.ok:
            valid.append(result.question)
        else:
            logger.warning("Skipping question #%d (%s): %s", i + 1, result.reason.value, result.detail)

    return valid
