"""
Message encryption.

The service's legacy scheme: AES-256-CBC, key derived from the cipher key as
the first 32 hex characters of its SHA-256, fixed IV, PKCS7 padding, base64
text on the wire.
"""

import base64
import binascii
import hashlib
from typing import Protocol

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from pubnub_rest.errors import DecryptionError

INITIAL_VECTOR = b"0123456789012345"


class Cryptor(Protocol):
    def encrypt(self, cipher_key: str, plaintext: str) -> str: ...

    def decrypt(self, cipher_key: str, ciphertext: str) -> str: ...


class LegacyCryptor:
    @staticmethod
    def _secret(cipher_key: str) -> bytes:
        return hashlib.sha256(cipher_key.encode("utf-8")).hexdigest()[:32].encode("utf-8")

    def _cipher(self, cipher_key: str) -> Cipher:
        return Cipher(algorithms.AES(self._secret(cipher_key)), modes.CBC(INITIAL_VECTOR))

    def encrypt(self, cipher_key: str, plaintext: str) -> str:
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()
        encryptor = self._cipher(cipher_key).encryptor()
        raw = encryptor.update(padded) + encryptor.finalize()
        return base64.b64encode(raw).decode("ascii")

    def decrypt(self, cipher_key: str, ciphertext: str) -> str:
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecryptionError("Ciphertext is not valid base64", e)
        if not raw or len(raw) % 16:
            raise DecryptionError(f"Ciphertext length {len(raw)} is not a multiple of the block size")
        decryptor = self._cipher(cipher_key).decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        try:
            plain = unpadder.update(padded) + unpadder.finalize()
            return plain.decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise DecryptionError("Decryption failed, wrong cipher key?", e)


default_cryptor = LegacyCryptor()
