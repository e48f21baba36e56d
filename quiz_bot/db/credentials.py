"""Per-user storage of the chat-completion API key."""
import logging
from typing import Optional

from cryptography.fernet import InvalidToken

from quiz_bot.config import CREDENTIAL_NAME
from quiz_bot.core.database import Database, get_db
from quiz_bot.core.encryption import CredentialEncryption, get_encryptor
from quiz_bot.exceptions import ValidationError

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Key-value store holding one opaque API key per user.

    The value is encrypted at rest; the key itself is never validated beyond
    being non-empty.
    """

    def __init__(self, db: Database, encryptor: CredentialEncryption, name: str = CREDENTIAL_NAME):
        self.db = db
        self.encryptor = encryptor
        self.name = name

    async def get(self, user_id: int) -> Optional[str]:
        """
        Get the stored API key.

        Returns:
            Decrypted key or None if the user never saved one
        """
        row = await self.db.fetchone(
            "SELECT value FROM credentials WHERE user_id = ? AND name = ?",
            (user_id, self.name),
        )
        if row is None:
            return None

        try:
            return self.encryptor.decrypt(row["value"]) or None
        except InvalidToken:
            # Encrypted with another ENCRYPTION_KEY; the user has to save it again
            logger.warning("Stored API key for user_id=%d cannot be decrypted", user_id)
            return None

    async def save(self, user_id: int, api_key: str) -> None:
        """
        Save or replace the API key.

        Raises:
            ValidationError: If the key is blank
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValidationError("Please enter a valid API key")

        await self.db.execute(
            """INSERT INTO credentials (user_id, name, value)
               VALUES (?, ?, ?)
               ON CONFLICT(user_id, name) DO UPDATE SET
                   value = excluded.value,
                   updated_at = datetime('now')""",
            (user_id, self.name, self.encryptor.encrypt(api_key)),
        )
        logger.info("API key saved for user_id=%d", user_id)

    async def remove(self, user_id: int) -> None:
        """Remove the API key. Removing a missing key is a no-op."""
        await self.db.execute(
            "DELETE FROM credentials WHERE user_id = ? AND name = ?",
            (user_id, self.name),
        )
        logger.info("API key removed for user_id=%d", user_id)

    async def exists(self, user_id: int) -> bool:
        row = await self.db.fetchone(
            "SELECT 1 FROM credentials WHERE user_id = ? AND name = ?",
            (user_id, self.name),
        )
        return row is not None


def get_credential_store() -> CredentialStore:
    """Credential store bound to the global database and encryptor."""
    return CredentialStore(get_db(), get_encryptor())
