"""Encryption module for securing stored API keys using Fernet symmetric encryption."""
import os
from typing import Optional

from cryptography.fernet import Fernet

from quiz_bot.config import settings


class CredentialEncryption:
    """Handle encryption/decryption of stored API keys."""

    def __init__(self, key: Optional[str] = None):
        """
        Initialize encryption with a key.

        Args:
            key: Base64-encoded Fernet key. If None, uses settings.ENCRYPTION_KEY
                 or the ENCRYPTION_KEY env var.
        """
        if key is None:
            key = settings.ENCRYPTION_KEY or os.getenv("ENCRYPTION_KEY")

        if not key:
            raise ValueError(
                "ENCRYPTION_KEY not found. Generate one with: "
                "python -c 'from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())'"
            )

        self.cipher = Fernet(key.encode() if isinstance(key, str) else key)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string. Empty input stays empty."""
        if not plaintext:
            return ""

        encrypted = self.cipher.encrypt(plaintext.encode())
        return encrypted.decode()

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt a string.

        Raises:
            InvalidToken: If the value was encrypted with another key
        """
        if not ciphertext:
            return ""

        decrypted = self.cipher.decrypt(ciphertext.encode())
        return decrypted.decode()


def generate_key() -> str:
    """Generate a new Fernet key for encryption."""
    return Fernet.generate_key().decode()


# Global encryption instance (created lazily on first use)
_encryptor: Optional[CredentialEncryption] = None


def get_encryptor() -> CredentialEncryption:
    """Get global encryption instance."""
    global _encryptor
    if _encryptor is None:
        _encryptor = CredentialEncryption()
    return _encryptor
