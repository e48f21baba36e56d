from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from quiz_bot.config import QUESTION_COUNTS
from quiz_bot.models import QuestionType


def question_type_keyboard() -> InlineKeyboardMarkup:
    buttons = []
    for i, question_type in enumerate(QuestionType):
        buttons.append([InlineKeyboardButton(text=question_type.value, callback_data=f"qtype:{i}")])
    buttons.append([InlineKeyboardButton(text="🔙 Back to subjects", callback_data="create_quiz")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def question_count_keyboard() -> InlineKeyboardMarkup:
    buttons = []
    for count in QUESTION_COUNTS:
        buttons.append([InlineKeyboardButton(
            text=f"{count} questions",
            callback_data=f"count:{count}",
        )])
    buttons.append([InlineKeyboardButton(text="🔙 Back to question type", callback_data="back_to_type")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)
