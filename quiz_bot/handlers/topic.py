from aiogram import Router, F
from aiogram.types import CallbackQuery, Message
from aiogram.fsm.context import FSMContext

from quiz_bot.keyboards.main_menu import home_keyboard
from quiz_bot.keyboards.settings_kb import question_type_keyboard
from quiz_bot.keyboards.subject_kb import subject_keyboard
from quiz_bot.models import Subject
from quiz_bot.states.quiz_states import QuizFlow

router = Router()

SUBJECTS = list(Subject)


@router.callback_query(F.data == "create_quiz")
async def choose_subject(callback: CallbackQuery, state: FSMContext):
    # Menu messages sent earlier still carry this button
    if await state.get_state() == QuizFlow.generating_quiz.state:
        await callback.answer("⏳ Still generating, please wait...")
        return

    await state.clear()
    await state.set_state(QuizFlow.choosing_subject)
    await callback.message.edit_text(
        "📚 Choose a subject:",
        reply_markup=subject_keyboard(),
    )
    await callback.answer()


@router.callback_query(QuizFlow.choosing_subject, F.data.startswith("subject:"))
async def subject_selected(callback: CallbackQuery, state: FSMContext):
    subject = SUBJECTS[int(callback.data.split(":")[1])]

    await state.update_data(subject=subject.value)
    await state.set_state(QuizFlow.entering_topic)
    await callback.message.edit_text(
        f"📚 Subject: {subject.value}\n\n"
        "✏️ Type the topic for your questions (e.g. Data Structures, Thermodynamics, Calculus):",
        reply_markup=home_keyboard(),
    )
    await callback.answer()


@router.message(QuizFlow.entering_topic)
async def topic_entered(message: Message, state: FSMContext):
    topic = message.text.strip() if message.text else ""
    if not topic:
        await message.answer("The topic can't be empty. Type the topic:")
        return

    await state.update_data(topic=topic)
    await state.set_state(QuizFlow.choosing_question_type)
    await message.answer(
        f"📝 Topic: {topic}\n\nWhich type of questions?",
        reply_markup=question_type_keyboard(),
    )
