"""
Shared-secret helpers: random key material and unpadded base32.
"""

import base64
import binascii
import os

from otpkit.errors import EntropyError, SecretDecodeError

# RFC 4226 asks for at least 160 bits; pick 32 bytes for SHA256 and 64 for SHA512.
DEFAULT_SECRET_LENGTH = 20


def random_secret(length: int = DEFAULT_SECRET_LENGTH) -> bytes:
    if length <= 0:
        raise ValueError("secret length must be positive")
    try:
        return os.urandom(length)
    except NotImplementedError as exc:
        raise EntropyError() from exc


def random_base32(length: int = DEFAULT_SECRET_LENGTH) -> str:
    return b32encode(random_secret(length))


def b32encode(data: bytes) -> str:
    """RFC 4648 base32, upper case, with the ``=`` padding stripped."""
    return base64.b32encode(data).decode("ascii").rstrip("=")


def b32decode(text: str) -> bytes:
    """
    Decode an unpadded base32 string. Lowercase input is accepted; explicit
    ``=`` padding and characters outside the alphabet are not.
    """
    if "=" in text:
        raise SecretDecodeError("unexpected padding in base32 secret")
    secret = text.upper()
    secret += "=" * (-len(secret) % 8)
    try:
        return base64.b32decode(secret)
    except (binascii.Error, ValueError) as exc:
        raise SecretDecodeError() from exc
