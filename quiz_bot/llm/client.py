import logging

from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError

from quiz_bot.config import settings
from quiz_bot.exceptions import ApiError

logger = logging.getLogger(__name__)


async def chat_completion(api_key: str, system_prompt: str, user_message: str) -> str:
    """
    Send one chat-completion request with the user's key and return the response text.

    No retries: a failed call surfaces as a single ApiError.
    """
    client = AsyncOpenAI(api_key=api_key, base_url=settings.LLM_BASE_URL, max_retries=0)
    try:
        response = await client.chat.completions.create(
            model=settings.LLM_MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=settings.LLM_TEMPERATURE,
        )
    except APIStatusError as e:
        message = _server_message(e)
        logger.error("LLM request rejected (HTTP %s): %s", e.status_code, message)
        raise ApiError(message) from e
    except APIConnectionError as e:
        logger.error("LLM request failed: %s", e)
        raise ApiError(f"Network failure: {e}") from e
    except OpenAIError as e:
        logger.error("LLM request failed: %s", e)
        raise ApiError(str(e) or "API request failed") from e
    finally:
        await client.close()

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise ApiError("No content in response")
    return content


def _server_message(error: APIStatusError) -> str:
    """Error message sent by the server, if the body carries one."""
    body = error.body
    if isinstance(body, dict):
        message = body.get("message")
        if not message and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        if isinstance(message, str) and message:
            return message
    return "API request failed"
