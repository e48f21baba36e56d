"""Tests for encrypted API key storage."""
import pytest

from quiz_bot.config import settings
from quiz_bot.core import database
from quiz_bot.core.encryption import CredentialEncryption, generate_key
from quiz_bot.db.credentials import CredentialStore
from quiz_bot.exceptions import ValidationError


class TestCredentialEncryption:

    def test_encrypt_decrypt(self, encryptor):
        token = encryptor.encrypt("sk-secret")

        assert token != "sk-secret"
        assert encryptor.decrypt(token) == "sk-secret"

    def test_empty_values(self, encryptor):
        assert encryptor.encrypt("") == ""
        assert encryptor.decrypt("") == ""

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("ENCRYPTION_KEY", raising=False)
        monkeypatch.setattr(settings, "ENCRYPTION_KEY", "")

        with pytest.raises(ValueError, match="ENCRYPTION_KEY"):
            CredentialEncryption()


class TestCredentialStore:

    async def test_get_missing(self, credential_store):
        assert await credential_store.get(12345) is None
        assert await credential_store.exists(12345) is False

    async def test_save_and_get(self, credential_store):
        await credential_store.save(12345, "  sk-test-key  ")

        assert await credential_store.get(12345) == "sk-test-key"
        assert await credential_store.exists(12345) is True

    async def test_encrypted_at_rest(self, credential_store, db):
        await credential_store.save(12345, "sk-test-key")

        row = await db.fetchone("SELECT value FROM credentials WHERE user_id = ?", (12345,))

        assert row["value"] != "sk-test-key"
        assert "sk-test-key" not in row["value"]

    async def test_save_replaces(self, credential_store):
        await credential_store.save(12345, "sk-old")
        await credential_store.save(12345, "sk-new")

        assert await credential_store.get(12345) == "sk-new"

    @pytest.mark.parametrize("api_key", ["", "   ", None])
    async def test_blank_key_rejected(self, credential_store, api_key):
        with pytest.raises(ValidationError, match="valid API key"):
            await credential_store.save(12345, api_key)

        assert await credential_store.exists(12345) is False

    async def test_remove(self, credential_store):
        await credential_store.save(12345, "sk-test-key")

        await credential_store.remove(12345)

        assert await credential_store.get(12345) is None
        await credential_store.remove(12345)

    async def test_users_are_separate(self, credential_store):
        await credential_store.save(1, "sk-one")
        await credential_store.save(2, "sk-two")
        await credential_store.remove(1)

        assert await credential_store.get(1) is None
        assert await credential_store.get(2) == "sk-two"

    async def test_undecryptable_value(self, db, credential_store, caplog):
        await credential_store.save(12345, "sk-test-key")
        other_store = CredentialStore(db, CredentialEncryption(generate_key()))

        assert await other_store.get(12345) is None
        assert "cannot be decrypted" in caplog.text
        assert await other_store.exists(12345) is True


class TestGlobalDatabase:

    def test_get_db_before_init(self, monkeypatch):
        monkeypatch.setattr(database, "db", None)

        with pytest.raises(RuntimeError, match="not initialized"):
            database.get_db()

    async def test_schema_is_idempotent(self, tmp_path):
        path = str(tmp_path / "quiz.db")
        first = await database.init_database(path)
        await first.execute(
            "INSERT INTO credentials (user_id, name, value) VALUES (?, ?, ?)", (1, "openai_api_key", "x")
        )
        await first.close()

        second = await database.init_database(path)
        row = await second.fetchone("SELECT value FROM credentials WHERE user_id = ?", (1,))
        await second.close()

        assert row["value"] == "x"
