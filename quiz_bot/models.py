"""Data models for quiz settings and generated questions."""
from enum import Enum
from typing import Annotated, Any, Literal, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, TypeAdapter, field_validator

from quiz_bot.config import QUESTION_COUNTS
from quiz_bot.exceptions import ValidationError


class Subject(str, Enum):
    """Subjects offered in the quiz form."""

    COMPUTER_SCIENCE = "Computer Science"
    ELECTRICAL_ENGINEERING = "Electrical Engineering"
    MECHANICAL_ENGINEERING = "Mechanical Engineering"
    CIVIL_ENGINEERING = "Civil Engineering"
    PHYSICS = "Physics"
    MATHEMATICS = "Mathematics"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "Multiple Choice"
    TRUE_FALSE = "True/False"
    SHORT_ANSWER = "Short Answer"


class GenerationParams(BaseModel):
    """Quiz settings chosen by the user. Frozen once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    subject: Subject
    topic: str = Field(..., min_length=1)
    question_type: QuestionType = Field(..., alias="questionType")
    count: int

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("topic must not be blank")
        return value

    @field_validator("count")
    @classmethod
    def _count_allowed(cls, value: int) -> int:
        if value not in QUESTION_COUNTS:
            raise ValueError(f"count must be one of {QUESTION_COUNTS}")
        return value


def build_params(subject: Any, topic: Any, question_type: Any, count: Any) -> GenerationParams:
    """
    Build GenerationParams from raw form values.

    Raises:
        ValidationError: If a field is missing or invalid; the message names the fields
    """
    try:
        return GenerationParams(
            subject=subject,
            topic=topic,
            question_type=question_type,
            count=count,
        )
    except pydantic.ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise ValidationError(f"Missing or invalid quiz settings: {', '.join(fields)}") from e


# ============================================================================
# QUESTIONS
# ============================================================================

class _QuestionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    question: StrictStr = Field(..., min_length=1)


class MultipleChoiceQuestion(_QuestionModel):
    """Four options, one of them correct."""

    type: Literal["Multiple Choice"] = "Multiple Choice"
    options: list[StrictStr] = Field(..., min_length=4, max_length=4)
    correct_option: StrictInt = Field(..., alias="correctOption", ge=0, le=3)
    user_answer: StrictInt | None = Field(default=None, alias="userAnswer")


class TrueFalseQuestion(_QuestionModel):
    """Statement with a boolean answer and an explanation."""

    type: Literal["True/False"] = "True/False"
    answer: StrictBool
    explanation: StrictStr = Field(..., min_length=1)
    user_answer: StrictBool | None = Field(default=None, alias="userAnswer")


class ShortAnswerQuestion(_QuestionModel):
    """Open question with a suggested answer. Never graded automatically."""

    type: Literal["Short Answer"] = "Short Answer"
    suggested_answer: StrictStr = Field(..., alias="suggestedAnswer", min_length=1)
    user_answer: StrictStr | None = Field(default=None, alias="userAnswer")


Question = Annotated[
    Union[MultipleChoiceQuestion, TrueFalseQuestion, ShortAnswerQuestion],
    Field(discriminator="type"),
]

question_adapter: TypeAdapter[Question] = TypeAdapter(Question)

QUESTION_MODELS = {
    QuestionType.MULTIPLE_CHOICE: MultipleChoiceQuestion,
    QuestionType.TRUE_FALSE: TrueFalseQuestion,
    QuestionType.SHORT_ANSWER: ShortAnswerQuestion,
}


def question_to_dict(question: Question) -> dict:
    """Serialize a question with its wire (camelCase) field names."""
    return question.model_dump(by_alias=True)


def question_from_dict(data: dict) -> Question:
    """Inverse of question_to_dict. Raises pydantic.ValidationError on bad data."""
    return question_adapter.validate_python(data)
