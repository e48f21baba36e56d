import logging
from typing import Awaitable, Callable, Optional

from quiz_bot.models import GenerationParams, Question
from quiz_bot.services.mock_generator import generate_mock
from quiz_bot.services.remote_generator import generate_remote

logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], Awaitable[Optional[str]]]


async def generate_questions(params: GenerationParams, credential: Optional[str] = None) -> list[Question]:
    """
    Generate questions with the API when a credential is given, offline otherwise.

    A failed API call is not retried offline: the ApiError reaches the caller.
    """
    if credential and credential.strip():
        logger.info("Generating questions via API: %s / %s", params.subject.value, params.topic)
        return await generate_remote(params, credential.strip())

    return await generate_mock(params)


class QuestionGenerator:
    """
    Question source for one request.

    The credential is read through the injected provider at most once, so
    everything done with one generator sees the same credential.
    """

    def __init__(self, credential_provider: CredentialProvider):
        self._credential_provider = credential_provider
        self._credential: Optional[str] = None
        self._loaded = False

    async def credential(self) -> Optional[str]:
        """Credential for this request, or None when it is missing or blank."""
        if not self._loaded:
            credential = await self._credential_provider()
            self._credential = credential.strip() if credential and credential.strip() else None
            self._loaded = True
        return self._credential

    async def generate(self, params: GenerationParams) -> list[Question]:
        return await generate_questions(params, await self.credential())
