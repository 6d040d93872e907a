"""
Symmetric encryption for OAuth tokens at rest.

AES-256-GCM with a random 16-byte IV and fixed associated data. Ciphertext
is stored as base64(iv + auth_tag + encrypted_bytes) so rows written by
earlier deployments remain readable.

Dependencies: cryptography
System role: Token protection for the Gmail token store
"""

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from jobtracker.core.exceptions import EncryptionError

IV_LENGTH = 16
TAG_LENGTH = 16
KEY_HEX_LENGTH = 64
ASSOCIATED_DATA = b"the-void-auth"


def generate_encryption_key() -> str:
    """
    Generate a new random key for ENCRYPTION_KEY.

    Returns:
        str: 64 hex characters (32 random bytes)
    """
    return os.urandom(32).hex()


def hash_value(text: str) -> str:
    """
    Hash a string for non-reversible storage (indexing, lookups).

    Args:
        text: Value to hash

    Returns:
        str: SHA-256 hex digest
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class TokenCipher:
    """AES-256-GCM cipher bound to a single hex-encoded key."""

    def __init__(self, key_hex: str) -> None:
        """
        Initialize cipher.

        Args:
            key_hex: 64 hex characters

        Raises:
            EncryptionError: If the key is missing or malformed
        """
        if not key_hex:
            raise EncryptionError("ENCRYPTION_KEY environment variable is not set")
        if len(key_hex) != KEY_HEX_LENGTH:
            raise EncryptionError("ENCRYPTION_KEY must be 64 characters (32 bytes in hex)")
        try:
            key = bytes.fromhex(key_hex)
        except ValueError as e:
            raise EncryptionError("ENCRYPTION_KEY must be hex encoded") from e
        self._aesgcm = AESGCM(key)

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt a string.

        Args:
            plaintext: Text to encrypt

        Returns:
            str: base64(iv + tag + ciphertext)
        """
        iv = os.urandom(IV_LENGTH)
        sealed = self._aesgcm.encrypt(iv, plaintext.encode("utf-8"), ASSOCIATED_DATA)
        # cryptography appends the tag; the stored layout puts it first
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return base64.b64encode(iv + tag + ciphertext).decode("ascii")

    def decrypt(self, token: str) -> str:
        """
        Decrypt a value produced by encrypt().

        Args:
            token: base64(iv + tag + ciphertext)

        Returns:
            str: Original plaintext

        Raises:
            EncryptionError: If the payload is malformed, tampered with,
                or was encrypted under another key
        """
        try:
            combined = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as e:
            raise EncryptionError("Failed to decrypt data") from e

        if len(combined) < IV_LENGTH + TAG_LENGTH:
            raise EncryptionError("Failed to decrypt data", {"reason": "payload too short"})

        iv = combined[:IV_LENGTH]
        tag = combined[IV_LENGTH:IV_LENGTH + TAG_LENGTH]
        ciphertext = combined[IV_LENGTH + TAG_LENGTH:]
        try:
            plaintext = self._aesgcm.decrypt(iv, ciphertext + tag, ASSOCIATED_DATA)
        except InvalidTag as e:
            raise EncryptionError("Failed to decrypt data", {"reason": "authentication failed"}) from e
        return plaintext.decode("utf-8")
