"""Quiz session state and the commands that change it.

The session is a plain value; `reduce` takes a session and a command and
returns the next session without touching the old one. Handlers keep the
session in the user's FSM data through `to_dict` / `from_dict`.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Sequence, Union

import pydantic

from quiz_bot.exceptions import ValidationError
from quiz_bot.models import (
    MultipleChoiceQuestion,
    Question,
    TrueFalseQuestion,
    question_from_dict,
    question_to_dict,
)
from quiz_bot.services.scorer import calculate_score, count_unanswered


@dataclass(frozen=True)
class Generate:
    """Replace the questions with a freshly generated set."""
    questions: Sequence[Question]


@dataclass(frozen=True)
class Answer:
    """Record the user's answer to one question before submission."""
    index: int
    value: Any


@dataclass(frozen=True)
class Submit:
    """Submit the quiz, optionally with answers given as {index: answer}."""
    answers: Optional[Mapping[int, Any]] = None


@dataclass(frozen=True)
class Clear:
    pass


Command = Union[Generate, Answer, Submit, Clear]


@dataclass
class QuizSession:
    """
    State of one user's quiz.

    Attributes:
        questions: Current questions, with user answers once given
        submitted: Whether the quiz was submitted
        score: Percentage score after submission, else None
    """

    questions: list[Question] = field(default_factory=list)
    submitted: bool = False
    score: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "questions": [question_to_dict(q) for q in self.questions],
            "submitted": self.submitted,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "QuizSession":
        if not data:
            return cls()
        try:
            questions = [question_from_dict(q) for q in data.get("questions", [])]
        except pydantic.ValidationError as e:
            raise ValidationError("Stored quiz is corrupted, please generate a new one") from e
        return cls(
            questions=questions,
            submitted=bool(data.get("submitted", False)),
            score=data.get("score"),
        )


def _with_answer(question: Question, value: Any) -> Question:
    """Copy of the question carrying the answer; the answer kind must match the type."""
    if isinstance(question, MultipleChoiceQuestion):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < len(question.options):
            raise ValidationError(f"Answer must be an option number from 0 to {len(question.options) - 1}")
    elif isinstance(question, TrueFalseQuestion):
        if not isinstance(value, bool):
            raise ValidationError("Answer must be True or False")
    else:
        if value is not None and not isinstance(value, str):
            raise ValidationError("Answer must be text")
        value = (value or "").strip() or None

    return question.model_copy(update={"user_answer": value})


def _check_index(session: QuizSession, index: int) -> None:
    if not 0 <= index < len(session.questions):
        raise ValidationError(f"There is no question #{index + 1}")


def reduce(session: QuizSession, command: Command) -> QuizSession:
    """
    Apply a command and return the next session.

    Raises:
        ValidationError: Bad answer, answering a submitted quiz, or submitting
            with unanswered multiple-choice / true-false questions. The given
            session is never modified.
    """
    if isinstance(command, Generate):
        return QuizSession(questions=list(command.questions))

    if isinstance(command, Clear):
        return QuizSession()

    if isinstance(command, Answer):
        if session.submitted:
            raise ValidationError("The quiz has already been submitted")
        _check_index(session, command.index)
        questions = list(session.questions)
        questions[command.index] = _with_answer(questions[command.index], command.value)
        return replace(session, questions=questions)

    if isinstance(command, Submit):
        if session.submitted:
            raise ValidationError("The quiz has already been submitted")
        questions = list(session.questions)
        for index, value in (command.answers or {}).items():
            _check_index(session, index)
            questions[index] = _with_answer(questions[index], value)

        unanswered = count_unanswered(questions)
        if unanswered:
            raise ValidationError(
                f"Please answer all questions before submitting: {unanswered} unanswered"
            )
        return QuizSession(questions=questions, submitted=True, score=calculate_score(questions))

    raise TypeError(f"Unknown command: {command!r}")
