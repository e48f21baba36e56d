import logging

from aiogram import Router, F
from aiogram.types import CallbackQuery
from aiogram.fsm.context import FSMContext

from quiz_bot.db.credentials import get_credential_store
from quiz_bot.exceptions import ApiError, ValidationError
from quiz_bot.keyboards.main_menu import main_menu_keyboard
from quiz_bot.keyboards.quiz_kb import quiz_actions_keyboard
from quiz_bot.keyboards.settings_kb import question_count_keyboard, question_type_keyboard
from quiz_bot.models import QuestionType, build_params
from quiz_bot.services.question_generator import QuestionGenerator
from quiz_bot.services.quiz_session import Generate, QuizSession, reduce
from quiz_bot.states.quiz_states import QuizFlow

logger = logging.getLogger(__name__)

router = Router()

QUESTION_TYPES = list(QuestionType)


@router.callback_query(QuizFlow.choosing_question_type, F.data.startswith("qtype:"))
async def question_type_selected(callback: CallbackQuery, state: FSMContext):
    question_type = QUESTION_TYPES[int(callback.data.split(":")[1])]
    await state.update_data(question_type=question_type.value)
    await state.set_state(QuizFlow.choosing_question_count)
    await callback.message.edit_text(
        f"❓ Question type: {question_type.value}\n\nHow many questions?",
        reply_markup=question_count_keyboard(),
    )
    await callback.answer()


@router.callback_query(F.data == "back_to_type")
async def back_to_type(callback: CallbackQuery, state: FSMContext):
    await state.set_state(QuizFlow.choosing_question_type)
    await callback.message.edit_text(
        "Which type of questions?",
        reply_markup=question_type_keyboard(),
    )
    await callback.answer()


@router.callback_query(QuizFlow.generating_quiz)
async def still_generating(callback: CallbackQuery):
    await callback.answer("⏳ Still generating, please wait...")


@router.callback_query(QuizFlow.choosing_question_count, F.data.startswith("count:"))
async def count_selected(callback: CallbackQuery, state: FSMContext):
    data = await state.get_data()
    try:
        params = build_params(
            data.get("subject"),
            data.get("topic"),
            data.get("question_type"),
            int(callback.data.split(":")[1]),
        )
    except ValidationError as e:
        await callback.answer(f"⚠️ {e}", show_alert=True)
        return

    user_id = callback.from_user.id
    store = get_credential_store()
    generator = QuestionGenerator(lambda: store.get(user_id))
    # Read once so the shown source is the one used
    credential = await generator.credential()

    await state.set_state(QuizFlow.generating_quiz)
    await callback.message.edit_text(
        f"⏳ Generating questions...\n\n"
        f"📚 Subject: {params.subject.value}\n"
        f"📝 Topic: {params.topic}\n"
        f"❓ Type: {params.question_type.value}\n"
        f"🔢 Questions: {params.count}\n"
        f"⚙️ Source: {'OpenAI API' if credential else 'sample questions (no API key saved)'}"
    )
    await callback.answer()

    try:
        questions = await generator.generate(params)
    except ApiError as e:
        logger.error("Quiz generation failed for user_id=%d: %s", user_id, e)
        await callback.message.edit_text(
            f"😞 Failed to generate questions: {e}\n\n"
            "Check your API key and try again.",
            reply_markup=main_menu_keyboard(),
        )
        await state.clear()
        return

    if not questions:
        await callback.message.edit_text(
            "😞 The API response contained no usable questions. Please try again.",
            reply_markup=main_menu_keyboard(),
        )
        await state.clear()
        return

    session = reduce(QuizSession(), Generate(questions))
    await state.update_data(session=session.to_dict(), current_index=0)
    await state.set_state(QuizFlow.reviewing_quiz)

    text = f"✅ Generated {len(questions)} questions about {params.topic}!"
    if len(questions) < params.count:
        text += f"\n\n(You asked for {params.count}; only {len(questions)} valid questions came back.)"
    await callback.message.edit_text(text, reply_markup=quiz_actions_keyboard())
