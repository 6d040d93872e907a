"""
Test suite for token encryption.

System role: Verification of AES-GCM token storage format
"""

import base64

import pytest

from jobtracker.core.encryption import TokenCipher, generate_encryption_key, hash_value
from jobtracker.core.exceptions import EncryptionError


@pytest.fixture
def cipher() -> TokenCipher:
    return TokenCipher(generate_encryption_key())


class TestTokenCipher:
    """Test suite for TokenCipher."""

    def test_decrypt_should_return_original_plaintext(self, cipher: TokenCipher) -> None:
        token = cipher.encrypt("ya29.access-token")

        assert cipher.decrypt(token) == "ya29.access-token"

    def test_encrypt_should_use_random_iv(self, cipher: TokenCipher) -> None:
        assert cipher.encrypt("same") != cipher.encrypt("same")

    def test_payload_should_hold_iv_tag_and_ciphertext(self, cipher: TokenCipher) -> None:
        raw = base64.b64decode(cipher.encrypt("abc"))

        # 16-byte IV + 16-byte tag + 3 bytes of ciphertext
        assert len(raw) == 16 + 16 + 3

    def test_tampered_payload_should_raise(self, cipher: TokenCipher) -> None:
        raw = bytearray(base64.b64decode(cipher.encrypt("secret")))
        raw[-1] ^= 0x01

        with pytest.raises(EncryptionError):
            cipher.decrypt(base64.b64encode(bytes(raw)).decode())

    def test_wrong_key_should_raise(self, cipher: TokenCipher) -> None:
        token = cipher.encrypt("secret")

        with pytest.raises(EncryptionError):
            TokenCipher(generate_encryption_key()).decrypt(token)

    def test_garbage_should_raise(self, cipher: TokenCipher) -> None:
        with pytest.raises(EncryptionError):
            cipher.decrypt("not base64 !!")

    @pytest.mark.parametrize("key", ["", "abc", "zz" * 32])
    def test_invalid_key_should_raise(self, key: str) -> None:
        with pytest.raises(EncryptionError):
            TokenCipher(key)


def test_generate_key_should_be_64_hex_chars() -> None:
    key = generate_encryption_key()

    assert len(key) == 64
    bytes.fromhex(key)


def test_hash_value_should_be_sha256_hex() -> None:
    assert hash_value("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
