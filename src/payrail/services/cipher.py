"""AES-256-GCM cipher for sensitive bank fields.

Blob layout: ``base64(nonce[12] || ciphertext || tag[16])``. The key is
PBKDF2-HMAC-SHA256 of the configured secret; it is derived once per
(secret, salt, iterations) and never logged. The cache is keyed on the
``SecretStr``, never on the plain-string secret.
"""

from __future__ import annotations

import base64
import binascii
import secrets
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from pydantic import SecretStr

from payrail.core.config import AppSettings, CipherConfig
from payrail.core.exceptions import ConfigurationError, DecryptionError
from payrail.core.logging import get_logger

logger = get_logger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16

# One message for every failure so callers cannot tell a wrong key from corrupted data.
_DECRYPT_FAILED = "Unable to decrypt bank data"


@lru_cache(maxsize=8)
def _derive_key(secret: SecretStr, salt: str, iterations: int) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt.encode("utf-8"),
        iterations=iterations,
    )
    return kdf.derive(secret.get_secret_value().encode("utf-8"))


class BankDataCipher:
    """Encrypts and decrypts strings under a single AES-256 key."""

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise ValueError(f"AES-256 key must be {KEY_SIZE} bytes, got {len(key)}")
        self._aesgcm = AESGCM(key)

    @classmethod
    def from_config(cls, config: CipherConfig) -> BankDataCipher:
        return cls(_derive_key(config.secret, config.salt, config.iterations))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key=***)"

    def encrypt(self, plaintext: str) -> str:
        nonce = secrets.token_bytes(NONCE_SIZE)
        sealed = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.b64encode(nonce + sealed).decode("ascii")

    def decrypt(self, blob: str) -> str:
        """Open a blob produced by ``encrypt``.

        Raises:
            DecryptionError: blob is not base64, too short, fails tag
                verification, or does not decode as UTF-8.
        """
        try:
            raw = base64.b64decode(blob, validate=True)
        except (binascii.Error, ValueError, TypeError):
            raise DecryptionError(_DECRYPT_FAILED) from None
        if len(raw) < NONCE_SIZE + TAG_SIZE:
            raise DecryptionError(_DECRYPT_FAILED)
        try:
            plaintext = self._aesgcm.decrypt(raw[:NONCE_SIZE], raw[NONCE_SIZE:], None)
            return plaintext.decode("utf-8")
        except (InvalidTag, UnicodeDecodeError):
            raise DecryptionError(_DECRYPT_FAILED) from None


def _refuse_placeholder_in_prod(settings: AppSettings) -> None:
    if settings.cipher.uses_placeholder_secret and settings.environment == "prod":
        raise ConfigurationError(
            "PAYRAIL_CIPHER_SECRET is unset; the placeholder secret is not allowed in prod"
        )


def check_cipher_config(settings: AppSettings) -> None:
    """Startup check: refuse the placeholder secret in prod, warn about it elsewhere."""
    _refuse_placeholder_in_prod(settings)
    if settings.cipher.uses_placeholder_secret:
        logger.warning("cipher_placeholder_secret", environment=settings.environment)


def cipher_from_settings(settings: AppSettings) -> BankDataCipher:
    """Build a cipher for explicit settings; prod still refuses the placeholder."""
    _refuse_placeholder_in_prod(settings)
    return BankDataCipher.from_config(settings.cipher)


@lru_cache(maxsize=1)
def default_cipher() -> BankDataCipher:
    """Cipher for the environment's settings, checked and built once per process."""
    settings = AppSettings()
    check_cipher_config(settings)
    return BankDataCipher.from_config(settings.cipher)


def _resolve(settings: AppSettings | None) -> BankDataCipher:
    return default_cipher() if settings is None else cipher_from_settings(settings)


def encrypt_bank_data(plaintext: str, settings: AppSettings | None = None) -> str:
    """Encrypt ``plaintext`` with the configured secret; returns base64."""
    return _resolve(settings).encrypt(plaintext)


def decrypt_bank_data(blob: str, settings: AppSettings | None = None) -> str:
    """Decrypt a blob from ``encrypt_bank_data``; raises DecryptionError on any failure."""
    return _resolve(settings).decrypt(blob)
