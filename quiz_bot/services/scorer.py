import math
from typing import Iterable, Optional

from quiz_bot.models import MultipleChoiceQuestion, Question, TrueFalseQuestion


def is_gradable(question: Question) -> bool:
    """Multiple choice and true/false are graded; short answers never are."""
    return isinstance(question, (MultipleChoiceQuestion, TrueFalseQuestion))


def check_answer(question: Question) -> Optional[bool]:
    """Whether the user's answer is correct; None if ungradable or unanswered."""
    if not is_gradable(question) or question.user_answer is None:
        return None

    if isinstance(question, MultipleChoiceQuestion):
        return question.user_answer == question.correct_option
    return question.user_answer == question.answer


def count_unanswered(questions: Iterable[Question]) -> int:
    """Gradable questions still missing an answer."""
    return sum(1 for q in questions if is_gradable(q) and q.user_answer is None)


def score_breakdown(questions: Iterable[Question]) -> tuple[int, int]:
    """Return (correct, gradable) over answered gradable questions."""
    correct = 0
    gradable = 0
    for q in questions:
        result = check_answer(q)
        if result is None:
            continue
        gradable += 1
        if result:
            correct += 1
    return correct, gradable


def calculate_score(questions: Iterable[Question]) -> int:
    """Percentage of correct answers, rounded half up; 0 when nothing is gradable."""
    correct, gradable = score_breakdown(questions)
    if gradable == 0:
        return 0
    return math.floor(100 * correct / gradable + 0.5)
