from aiogram.fsm.state import StatesGroup, State


class QuizFlow(StatesGroup):
    entering_api_key = State()
    choosing_subject = State()
    entering_topic = State()
    choosing_question_type = State()
    choosing_question_count = State()
    generating_quiz = State()
    reviewing_quiz = State()
    answering_question = State()
    viewing_results = State()
