from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton


def saved_key_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="♻️ Reset API key", callback_data="reset_api_key")],
        [InlineKeyboardButton(text="🏠 Back", callback_data="go_home")],
    ])
