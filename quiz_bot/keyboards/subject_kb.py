from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from quiz_bot.models import Subject


def subject_keyboard() -> InlineKeyboardMarkup:
    buttons = []
    for i, subject in enumerate(Subject):
        buttons.append([InlineKeyboardButton(text=subject.value, callback_data=f"subject:{i}")])
    buttons.append([InlineKeyboardButton(text="🏠 Back", callback_data="go_home")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)
