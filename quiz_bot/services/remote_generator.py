import logging

from quiz_bot.llm.client import chat_completion
from quiz_bot.llm.parser import parse_questions
from quiz_bot.llm.prompts import build_system_prompt, build_user_message
from quiz_bot.models import GenerationParams, Question

logger = logging.getLogger(__name__)


async def generate_remote(params: GenerationParams, api_key: str) -> list[Question]:
    """
    Generate questions through the chat-completion API.

    Returns every valid question that came back, which may be more or
    fewer than requested; no second request is made.

    Raises:
        ApiError: Rejected key, network failure or missing content
        ParseError: Response held no recoverable JSON array
    """
    raw = await chat_completion(api_key, build_system_prompt(params), build_user_message(params))
    questions = parse_questions(raw, params.question_type)

    if len(questions) < params.count:
        logger.warning(
            "Received fewer questions than requested: %d/%d", len(questions), params.count
        )

    return questions
