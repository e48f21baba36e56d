"""API key card: save, show and reset the user's OpenAI key."""
import logging

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery
from aiogram.fsm.context import FSMContext

from quiz_bot.db.credentials import get_credential_store
from quiz_bot.exceptions import ValidationError
from quiz_bot.keyboards.api_key_kb import saved_key_keyboard
from quiz_bot.keyboards.main_menu import home_keyboard, main_menu_keyboard
from quiz_bot.states.quiz_states import QuizFlow

logger = logging.getLogger(__name__)

router = Router()

ENTER_KEY_TEXT = (
    "🔑 Send me your OpenAI API key (sk-...).\n\n"
    "The key is stored encrypted and used only to generate your quizzes. "
    "I'll delete your message right away."
)


@router.callback_query(F.data == "api_key")
async def show_api_key(callback: CallbackQuery, state: FSMContext):
    store = get_credential_store()

    if await store.exists(callback.from_user.id):
        await state.clear()
        await callback.message.edit_text(
            "🔑 OpenAI API key is saved.",
            reply_markup=saved_key_keyboard(),
        )
    else:
        await state.set_state(QuizFlow.entering_api_key)
        await callback.message.edit_text(ENTER_KEY_TEXT, reply_markup=home_keyboard())
    await callback.answer()


@router.message(QuizFlow.entering_api_key)
async def api_key_entered(message: Message, state: FSMContext):
    api_key = message.text.strip() if message.text else ""

    # Delete message with the key for security
    try:
        await message.delete()
    except Exception as e:
        logger.warning("Could not delete API key message: %s", e)

    store = get_credential_store()
    try:
        await store.save(message.from_user.id, api_key)
    except ValidationError as e:
        await message.answer(f"⚠️ {e}", reply_markup=home_keyboard())
        return

    await state.clear()
    await message.answer("✅ API key saved successfully.", reply_markup=main_menu_keyboard())


@router.callback_query(F.data == "reset_api_key")
async def reset_api_key(callback: CallbackQuery, state: FSMContext):
    store = get_credential_store()
    await store.remove(callback.from_user.id)
    await state.clear()
    await callback.message.edit_text(
        "ℹ️ API key removed. Quizzes will use built-in sample questions.",
        reply_markup=main_menu_keyboard(),
    )
    await callback.answer()
