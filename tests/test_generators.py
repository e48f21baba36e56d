"""Tests for the remote generator and the generator facade."""
import json
from unittest.mock import AsyncMock, patch

import pytest

from quiz_bot.exceptions import ApiError, ParseError
from quiz_bot.models import MultipleChoiceQuestion, QuestionType
from quiz_bot.services.question_generator import QuestionGenerator, generate_questions
from quiz_bot.services.remote_generator import generate_remote


def _mc_entries(n):
    return [
        {
            "type": "Multiple Choice",
            "question": f"Question {i + 1}?",
            "options": ["A", "B", "C", "D"],
            "correctOption": i % 4,
        }
        for i in range(n)
    ]


class TestGenerateRemote:

    @patch("quiz_bot.services.remote_generator.chat_completion", new_callable=AsyncMock)
    async def test_returns_parsed_questions(self, mock_chat, mc_params):
        mock_chat.return_value = json.dumps(_mc_entries(5))

        questions = await generate_remote(mc_params, "sk-test")

        assert len(questions) == 5
        assert all(isinstance(q, MultipleChoiceQuestion) for q in questions)
        api_key, system_prompt, user_message = mock_chat.call_args.args
        assert api_key == "sk-test"
        assert "Data Structures" in system_prompt
        assert user_message.startswith("Generate 5 unique quiz questions")

    @patch("quiz_bot.services.remote_generator.chat_completion", new_callable=AsyncMock)
    async def test_keeps_extra_questions(self, mock_chat, mc_params, caplog):
        mock_chat.return_value = json.dumps(_mc_entries(8))

        questions = await generate_remote(mc_params, "sk-test")

        assert [q.question for q in questions] == [f"Question {i + 1}?" for i in range(8)]
        assert "fewer questions" not in caplog.text

    @patch("quiz_bot.services.remote_generator.chat_completion", new_callable=AsyncMock)
    async def test_fewer_questions_are_kept(self, mock_chat, mc_params, caplog):
        entries = _mc_entries(3) + [{"type": "True/False", "question": "?", "answer": True, "explanation": "x"}]
        mock_chat.return_value = json.dumps(entries)

        questions = await generate_remote(mc_params, "sk-test")

        assert len(questions) == 3
        assert "fewer questions than requested: 3/5" in caplog.text
        mock_chat.assert_awaited_once()

    @patch("quiz_bot.services.remote_generator.chat_completion", new_callable=AsyncMock)
    async def test_unparseable_response(self, mock_chat, mc_params):
        mock_chat.return_value = "No questions today."

        with pytest.raises(ParseError):
            await generate_remote(mc_params, "sk-test")


class TestGenerateQuestions:

    @patch("quiz_bot.services.question_generator.generate_mock", new_callable=AsyncMock)
    @patch("quiz_bot.services.question_generator.generate_remote", new_callable=AsyncMock)
    async def test_credential_selects_remote(self, mock_remote, mock_mock, mc_params):
        mock_remote.return_value = ["remote"]

        result = await generate_questions(mc_params, "  sk-test  ")

        assert result == ["remote"]
        mock_remote.assert_awaited_once_with(mc_params, "sk-test")
        mock_mock.assert_not_awaited()

    @pytest.mark.parametrize("credential", [None, "", "   "])
    @patch("quiz_bot.services.question_generator.generate_mock", new_callable=AsyncMock)
    @patch("quiz_bot.services.question_generator.generate_remote", new_callable=AsyncMock)
    async def test_no_credential_selects_mock(self, mock_remote, mock_mock, mc_params, credential):
        mock_mock.return_value = ["mock"]

        result = await generate_questions(mc_params, credential)

        assert result == ["mock"]
        mock_remote.assert_not_awaited()

    @patch("quiz_bot.services.question_generator.generate_mock", new_callable=AsyncMock)
    @patch("quiz_bot.services.question_generator.generate_remote", new_callable=AsyncMock)
    async def test_remote_failure_has_no_fallback(self, mock_remote, mock_mock, mc_params):
        mock_remote.side_effect = ApiError("Incorrect API key provided")

        with pytest.raises(ApiError, match="Incorrect API key"):
            await generate_questions(mc_params, "sk-bad")

        mock_mock.assert_not_awaited()

    async def test_without_credential_generates_offline(self, mc_params):
        questions = await generate_questions(mc_params)

        assert len(questions) == 5
        assert all(q.type == QuestionType.MULTIPLE_CHOICE.value for q in questions)


class TestQuestionGenerator:

    async def test_reads_credential_once(self, mc_params):
        provider = AsyncMock(return_value=None)
        generator = QuestionGenerator(provider)

        assert await generator.credential() is None
        await generator.generate(mc_params)
        await generator.generate(mc_params)

        provider.assert_awaited_once()

    @pytest.mark.parametrize("stored,expected", [(" sk-test ", "sk-test"), ("   ", None), (None, None)])
    async def test_credential(self, stored, expected):
        generator = QuestionGenerator(AsyncMock(return_value=stored))

        assert await generator.credential() == expected

    @patch("quiz_bot.services.question_generator.generate_remote", new_callable=AsyncMock)
    async def test_generates_with_credential_read_first(self, mock_remote, mc_params):
        provider = AsyncMock(side_effect=["sk-first", "sk-changed"])
        mock_remote.return_value = []
        generator = QuestionGenerator(provider)

        assert await generator.credential() == "sk-first"
        await generator.generate(mc_params)

        mock_remote.assert_awaited_once_with(mc_params, "sk-first")

    @patch("quiz_bot.services.question_generator.generate_remote", new_callable=AsyncMock)
    async def test_uses_stored_credential(self, mock_remote, mc_params, credential_store):
        await credential_store.save(12345, "sk-stored")
        mock_remote.return_value = []
        generator = QuestionGenerator(lambda: credential_store.get(12345))

        await generator.generate(mc_params)

        mock_remote.assert_awaited_once_with(mc_params, "sk-stored")
