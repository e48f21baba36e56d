from typing import Any

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from quiz_bot.exceptions import ValidationError
from quiz_bot.keyboards.main_menu import main_menu_keyboard
from quiz_bot.keyboards.quiz_kb import (
    OPTION_LABELS,
    multiple_choice_keyboard,
    short_answer_keyboard,
    submit_keyboard,
    true_false_keyboard,
)
from quiz_bot.models import MultipleChoiceQuestion, ShortAnswerQuestion, TrueFalseQuestion
from quiz_bot.services.quiz_session import Answer, Clear, QuizSession, Submit, reduce
from quiz_bot.states.quiz_states import QuizFlow

router = Router()


@router.callback_query(QuizFlow.reviewing_quiz, F.data == "start_quiz")
async def start_quiz(callback: CallbackQuery, state: FSMContext):
    """Send the first question of the quiz."""
    await state.set_state(QuizFlow.answering_question)
    await state.update_data(current_index=0)
    await callback.answer()
    await send_current_question(callback.message, state)


async def send_current_question(message: Message, state: FSMContext):
    """Send the current question based on its type."""
    data = await state.get_data()
    session = QuizSession.from_dict(data.get("session"))
    index = data.get("current_index", 0)
    total = len(session.questions)

    if index >= total:
        await message.answer(
            "🏁 That was the last question. Press Submit to see your score.",
            reply_markup=submit_keyboard(),
        )
        return

    q = session.questions[index]
    header = f"❓ Question {index + 1} of {total}\n\n"

    if isinstance(q, MultipleChoiceQuestion):
        options = "\n".join(f"{OPTION_LABELS[i]}) {option}" for i, option in enumerate(q.options))
        await message.answer(
            header + q.question + "\n\n" + options,
            reply_markup=multiple_choice_keyboard(index, q.options),
        )

    elif isinstance(q, TrueFalseQuestion):
        await message.answer(header + q.question, reply_markup=true_false_keyboard(index))

    else:
        await message.answer(
            header + q.question + "\n\n✏️ Type your answer (it won't be graded automatically):",
            reply_markup=short_answer_keyboard(index),
        )


@router.callback_query(QuizFlow.answering_question, F.data.startswith("ans:"))
async def answer_via_button(callback: CallbackQuery, state: FSMContext):
    """Handle answers from inline keyboard buttons (multiple choice, true/false, skip)."""
    _, raw_index, raw = callback.data.split(":", 2)
    index = int(raw_index)

    # Buttons of earlier questions stay live in the chat
    data = await state.get_data()
    if index != data.get("current_index", 0):
        await callback.answer("This question is no longer active.")
        return
    await callback.answer()

    if raw == "skip":
        value = None
    elif raw in ("true", "false"):
        value = raw == "true"
    else:
        value = int(raw)
    await _process_answer(callback.message, state, index, value)


@router.message(QuizFlow.answering_question)
async def answer_via_text(message: Message, state: FSMContext):
    """Handle answers typed as text (short answer)."""
    user_answer = message.text.strip() if message.text else ""
    if not user_answer:
        await message.answer("Type your answer as text:")
        return

    data = await state.get_data()
    session = QuizSession.from_dict(data.get("session"))
    index = data.get("current_index", 0)
    if index >= len(session.questions) or not isinstance(session.questions[index], ShortAnswerQuestion):
        await message.answer("Please use the buttons to answer this question.")
        return

    await _process_answer(message, state, index, user_answer)


async def _process_answer(message: Message, state: FSMContext, index: int, value: Any):
    """Record the answer to question #index and advance to the next question."""
    data = await state.get_data()
    session = QuizSession.from_dict(data.get("session"))

    try:
        session = reduce(session, Answer(index, value))
    except ValidationError as e:
        await message.answer(f"⚠️ {e}")
        return

    await state.update_data(session=session.to_dict(), current_index=index + 1)
    await send_current_question(message, state)


@router.callback_query(QuizFlow.answering_question, F.data == "submit_quiz")
async def submit_quiz(callback: CallbackQuery, state: FSMContext):
    """Grade the quiz; refuse while multiple-choice or true/false questions are unanswered."""
    data = await state.get_data()
    session = QuizSession.from_dict(data.get("session"))

    try:
        session = reduce(session, Submit())
    except ValidationError as e:
        await callback.answer(f"⚠️ {e}", show_alert=True)
        return

    await callback.answer()
    await state.update_data(session=session.to_dict())
    await state.set_state(QuizFlow.viewing_results)

    from quiz_bot.handlers.results import show_results
    await show_results(callback.message, state)


@router.callback_query(F.data == "cancel_quiz")
async def cancel_quiz(callback: CallbackQuery, state: FSMContext):
    """Cancel the current quiz and go home."""
    await clear_session(state)
    await callback.message.answer(
        "Quiz cancelled. Back to the main menu.",
        reply_markup=main_menu_keyboard(),
    )
    await callback.answer()


async def clear_session(state: FSMContext):
    """Reset the stored session to an empty quiz and leave the quiz flow."""
    data = await state.get_data()
    session = reduce(QuizSession.from_dict(data.get("session")), Clear())
    await state.set_state(None)
    await state.set_data({"session": session.to_dict()})
