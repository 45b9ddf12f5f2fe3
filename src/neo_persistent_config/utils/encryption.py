"""Config value encryption utilities.

Provides encryption/decryption of persisted configuration values using
Fernet symmetric encryption with a PBKDF2-derived key, compatible with the
platform's password encryption scheme.
"""

import base64
import os
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..core.exceptions import ConfigurationError, DecryptionError, EncryptionError

# Fixed salt keeps derived keys stable across processes sharing a passphrase
DEFAULT_SALT = b'NeoMultiTenant2024'


class Encrypter:
    """Encrypt and decrypt config values stored in persistent storage."""

    def __init__(self, encryption_key: Optional[str] = None, salt: bytes = DEFAULT_SALT):
        """
        Initialize encryption with the provided key or from environment.

        Args:
            encryption_key: The passphrase to derive the cipher key from. If not
                          provided, uses PERSISTENT_CONFIG_ENCRYPTION_KEY or
                          APP_ENCRYPTION_KEY from environment.
            salt: Salt for the key derivation.
        """
        self.key_string = (
            encryption_key or
            os.environ.get('PERSISTENT_CONFIG_ENCRYPTION_KEY') or
            os.environ.get('APP_ENCRYPTION_KEY')
        )

        if not self.key_string:
            raise ConfigurationError(
                "PERSISTENT_CONFIG_ENCRYPTION_KEY or APP_ENCRYPTION_KEY not found in environment variables"
            )

        self.salt = salt
        self.cipher = self._get_cipher()

    def _get_cipher(self) -> Fernet:
        """
        Create a Fernet cipher from the encryption key string.
        Uses PBKDF2 to derive a proper key from the string.
        """
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=self.salt,
            iterations=100000,
        )

        key_bytes = self.key_string.encode('utf-8')
        derived_key = base64.urlsafe_b64encode(kdf.derive(key_bytes))

        return Fernet(derived_key)

    def encrypt_string(self, value: str) -> str:
        """
        Encrypt a plaintext string.

        Args:
            value: The plaintext to encrypt.

        Returns:
            The Fernet token as a string.
        """
        try:
            return self.cipher.encrypt(value.encode('utf-8')).decode('utf-8')
        except (AttributeError, TypeError) as e:
            raise EncryptionError(f"Failed to encrypt value: {e}")

    def decrypt_string(self, payload: str) -> str:
        """
        Decrypt a Fernet token.

        Args:
            payload: The encrypted value.

        Returns:
            The decrypted plaintext.

        Raises:
            DecryptionError: if the payload is not a valid token for this key.
        """
        if not isinstance(payload, (str, bytes)):
            raise DecryptionError(f"Encrypted payload must be a string, got {type(payload).__name__}")

        token = payload.encode('utf-8') if isinstance(payload, str) else payload
        try:
            return self.cipher.decrypt(token).decode('utf-8')
        except (InvalidToken, UnicodeDecodeError) as e:
            raise DecryptionError(f"Failed to decrypt value: {e.__class__.__name__}")

    def is_encrypted(self, value: str) -> bool:
        """Check if a value appears to be a Fernet token."""
        if not value or not isinstance(value, str):
            return False

        # Fernet tokens start with 'gAAAAA'
        return value.startswith('gAAAAA')


# Singleton instance for use across the application
_encrypter_instance: Optional[Encrypter] = None


def get_encrypter() -> Encrypter:
    """
    Get the singleton encrypter instance.

    The key is taken from settings first, then from the environment.
    """
    global _encrypter_instance
    if _encrypter_instance is None:
        from ..config.settings import get_settings

        settings = get_settings()
        key = settings.encryption_key.get_secret_value() if settings.is_encryption_enabled else None
        _encrypter_instance = Encrypter(key)
    return _encrypter_instance


def reset_encrypter() -> None:
    """
    Reset the singleton encrypter instance.

    This function is primarily useful for testing scenarios.
    """
    global _encrypter_instance
    _encrypter_instance = None
