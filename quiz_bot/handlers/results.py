import logging

from aiogram import Router, F
from aiogram.types import BufferedInputFile, CallbackQuery, Message
from aiogram.fsm.context import FSMContext

from quiz_bot.handlers.quiz import clear_session
from quiz_bot.keyboards.main_menu import main_menu_keyboard
from quiz_bot.keyboards.quiz_kb import OPTION_LABELS, quiz_actions_keyboard
from quiz_bot.models import MultipleChoiceQuestion, Question, TrueFalseQuestion
from quiz_bot.services.exporter import format_questions_text
from quiz_bot.services.quiz_session import QuizSession
from quiz_bot.services.scorer import check_answer, is_gradable, score_breakdown

logger = logging.getLogger(__name__)

router = Router()


def _correct_answer_text(q: Question) -> str:
    if isinstance(q, MultipleChoiceQuestion):
        return f"{OPTION_LABELS[q.correct_option]}) {q.options[q.correct_option]}"
    if isinstance(q, TrueFalseQuestion):
        return "True" if q.answer else "False"
    return q.suggested_answer


def format_results(session: QuizSession) -> str:
    """Score summary followed by a short per-question review."""
    correct, gradable = score_breakdown(session.questions)
    percent = session.score or 0

    if percent >= 90:
        emoji, comment = "🏆", "Excellent result!"
    elif percent >= 70:
        emoji, comment = "👍", "Good result!"
    elif percent >= 50:
        emoji, comment = "📖", "Not bad, but there's room to improve."
    else:
        emoji, comment = "💪", "Keep practicing, you'll get there!"

    lines = ["📊 Quiz results\n"]
    if gradable:
        lines.append(f"{emoji} Correct: {correct} of {gradable} ({percent}%)")
        lines.append(comment)
    else:
        lines.append(f"Score: {percent}%")

    if any(not is_gradable(q) for q in session.questions):
        lines.append("\n✏️ Short answers are not graded automatically; compare them with the suggested answers.")

    lines.append("")
    for i, q in enumerate(session.questions, start=1):
        result = check_answer(q)
        if result is None:
            lines.append(f"✏️ {i}. Suggested answer: {_correct_answer_text(q)}")
        elif result:
            lines.append(f"✅ {i}.")
        else:
            lines.append(f"❌ {i}. Correct answer: {_correct_answer_text(q)}")

    return "\n".join(lines)


async def show_results(message: Message, state: FSMContext):
    """Show the final quiz results."""
    data = await state.get_data()
    session = QuizSession.from_dict(data.get("session"))
    await message.answer(format_results(session), reply_markup=quiz_actions_keyboard(submitted=True))


@router.callback_query(F.data == "copy_quiz")
async def copy_quiz(callback: CallbackQuery, state: FSMContext):
    """Send the questions with their answer key as a text file."""
    data = await state.get_data()
    session = QuizSession.from_dict(data.get("session"))
    if not session.questions:
        await callback.answer("There are no questions to copy.", show_alert=True)
        return

    text = format_questions_text(session.questions)
    await callback.message.answer_document(
        BufferedInputFile(text.encode("utf-8"), filename="quiz.txt"),
        caption="📋 All questions with answers",
    )
    await callback.answer("Questions copied!")


@router.callback_query(F.data == "pdf_quiz")
async def download_pdf(callback: CallbackQuery):
    await callback.answer("PDF download is not available yet.", show_alert=True)


@router.callback_query(F.data == "clear_quiz")
async def clear_quiz(callback: CallbackQuery, state: FSMContext):
    await clear_session(state)
    await callback.message.answer("🗑 Quiz cleared.", reply_markup=main_menu_keyboard())
    await callback.answer()
