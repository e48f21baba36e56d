from typing import Iterable

from quiz_bot.models import MultipleChoiceQuestion, Question, TrueFalseQuestion

OPTION_MARKERS = "abcd"


def format_question_text(number: int, question: Question) -> str:
    """One numbered question with its answer key."""
    lines = [f"{number}. {question.question}"]

    if isinstance(question, MultipleChoiceQuestion):
        for i, option in enumerate(question.options):
            suffix = " (Correct)" if i == question.correct_option else ""
            lines.append(f"  {OPTION_MARKERS[i]}) {option}{suffix}")
    elif isinstance(question, TrueFalseQuestion):
        lines.append(f"  Answer: {'True' if question.answer else 'False'}")
        lines.append(f"  Explanation: {question.explanation}")
    else:
        lines.append(f"  Suggested Answer: {question.suggested_answer}")

    return "\n".join(lines)


def format_questions_text(questions: Iterable[Question]) -> str:
    """Plain-text answer key of the whole quiz, questions separated by a blank line."""
    return "\n\n".join(format_question_text(i + 1, q) for i, q in enumerate(questions))
