from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

OPTION_LABELS = ["A", "B", "C", "D"]


def _footer() -> list[list[InlineKeyboardButton]]:
    return [
        [InlineKeyboardButton(text="📨 Submit answers", callback_data="submit_quiz")],
        [InlineKeyboardButton(text="❌ Cancel quiz", callback_data="cancel_quiz")],
    ]


def multiple_choice_keyboard(index: int, options: list[str]) -> InlineKeyboardMarkup:
    """Option buttons for question #index; callback data is ans:{index}:{option}."""
    buttons = []
    for i, option in enumerate(options[:4]):
        buttons.append([InlineKeyboardButton(
            text=f"{OPTION_LABELS[i]}) {option}",
            callback_data=f"ans:{index}:{i}",
        )])
    return InlineKeyboardMarkup(inline_keyboard=buttons + _footer())


def true_false_keyboard(index: int) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text="✅ True", callback_data=f"ans:{index}:true"),
            InlineKeyboardButton(text="❌ False", callback_data=f"ans:{index}:false"),
        ],
    ] + _footer())


def short_answer_keyboard(index: int) -> InlineKeyboardMarkup:
    """Keyboard shown during text-input questions."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="⏭ Skip", callback_data=f"ans:{index}:skip")],
    ] + _footer())


def submit_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=_footer())


def quiz_actions_keyboard(submitted: bool = False) -> InlineKeyboardMarkup:
    """Actions on a generated quiz: take it, export it or clear it."""
    buttons = []
    if not submitted:
        buttons.append([InlineKeyboardButton(text="▶️ Start quiz", callback_data="start_quiz")])
    buttons += [
        [
            InlineKeyboardButton(text="📋 Copy all", callback_data="copy_quiz"),
            InlineKeyboardButton(text="📄 Download PDF", callback_data="pdf_quiz"),
        ],
        [InlineKeyboardButton(text="🗑 Clear", callback_data="clear_quiz")],
    ]
    return InlineKeyboardMarkup(inline_keyboard=buttons)
