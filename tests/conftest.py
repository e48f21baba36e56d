"""Shared fixtures for the quiz bot tests."""
import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from quiz_bot.config import settings
from quiz_bot.core.database import init_database
from quiz_bot.core.encryption import CredentialEncryption, generate_key
from quiz_bot.db.credentials import CredentialStore
from quiz_bot.models import (
    GenerationParams,
    MultipleChoiceQuestion,
    QuestionType,
    ShortAnswerQuestion,
    Subject,
    TrueFalseQuestion,
)


@pytest.fixture(autouse=True)
def no_mock_delay(monkeypatch):
    """The offline generator must not sleep in tests."""
    monkeypatch.setattr(settings, "MOCK_DELAY_SECONDS", 0)


@pytest.fixture
def encryptor():
    return CredentialEncryption(generate_key())


@pytest.fixture
async def db(tmp_path):
    """Fresh SQLite database in a temporary directory."""
    database = await init_database(str(tmp_path / "data" / "test.db"))
    yield database
    await database.close()


@pytest.fixture
def credential_store(db, encryptor):
    return CredentialStore(db, encryptor)


@pytest.fixture
def state():
    """Real FSM context on in-memory storage for user 12345."""
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=12345, user_id=12345),
    )


@pytest.fixture
def mc_params():
    return GenerationParams(
        subject=Subject.COMPUTER_SCIENCE,
        topic="Data Structures",
        question_type=QuestionType.MULTIPLE_CHOICE,
        count=5,
    )


@pytest.fixture
def mc_question():
    """Multiple-choice question whose correct option is B (index 1)."""
    return MultipleChoiceQuestion(
        question="Which data structure operates on a LIFO principle?",
        options=["Queue", "Stack", "Linked List", "Binary Tree"],
        correct_option=1,
    )


@pytest.fixture
def tf_question():
    """True/false question whose answer is True."""
    return TrueFalseQuestion(
        question="HTTP is a stateless protocol.",
        answer=True,
        explanation="Each HTTP request is independent of the previous ones.",
    )


@pytest.fixture
def sa_question():
    return ShortAnswerQuestion(
        question="What is the primary purpose of an operating system?",
        suggested_answer="Managing hardware resources and providing services to programs.",
    )
