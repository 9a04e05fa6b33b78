"""
otpkit - HOTP (RFC 4226) and TOTP (RFC 6238) one-time passwords.
"""

from datetime import datetime
from typing import Optional, Tuple, Union
import hmac
import logging
import math
import struct
import time

from otpkit.config import (Algorithm, Digits, INT64_MAX, INT64_MIN, OTPConfig,
                           OTPType)
from otpkit.errors import EmptySecretError, SecretDecodeError
from otpkit.keyuri import KeyURI, make_label, quote_issuer
from otpkit.secret import b32decode

logger = logging.getLogger(__name__)

Timestamp = Union[int, float, datetime]


def encode_moving_factor(value: int) -> bytes:
    """8-byte big-endian two's complement, as fed to the HMAC."""
    return struct.pack(">q", value)


def generate_code(secret: bytes, moving_factor: int,
                  algorithm: Algorithm = Algorithm.SHA1,
                  digits: int = Digits.SIX) -> str:
    """HMAC the moving factor and apply RFC 4226 dynamic truncation."""
    hasher = Algorithm.parse(algorithm).hasher
    h = hmac.new(secret, encode_moving_factor(moving_factor), hasher).digest()

    offset = h[-1] & 0x0F
    bits = struct.unpack(">I", h[offset:offset + 4])[0] & 0x7FFFFFFF

    code = bits % (10 ** int(digits))
    return str(code).zfill(int(digits))


def _token_bytes(token) -> Optional[bytes]:
    if isinstance(token, bytes):
        return token
    if isinstance(token, str):
        return token.encode("utf-8")
    return None


def _unix_seconds(timestamp: Timestamp) -> int:
    if isinstance(timestamp, datetime):
        timestamp = timestamp.timestamp()
    return math.floor(timestamp)


class HOTP:
    """
    Counter-based generator. The counter is owned by the caller: nothing here
    tracks which counters have already been accepted.
    """

    type = OTPType.HOTP

    def __init__(self, secret: str, config: Optional[OTPConfig] = None, **options):
        if not secret:
            raise EmptySecretError()
        key = b32decode(secret)
        if not key:
            raise SecretDecodeError()

        if config is None:
            config = OTPConfig(**options)
        elif options:
            config = config.replace(**options)

        self._secret = secret
        self._key = key
        self._config = config
        logger.debug("created %s generator (%s, %d digits)",
                     self.type.value, config.algorithm.value, config.digits)

    @property
    def secret(self) -> str:
        return self._secret

    @property
    def config(self) -> OTPConfig:
        return self._config

    @property
    def algorithm(self) -> Algorithm:
        return self._config.algorithm

    @property
    def digits(self) -> Digits:
        return self._config.digits

    @property
    def counter(self) -> int:
        return self._config.counter

    @property
    def skew(self) -> int:
        return self._config.skew

    def _matches(self, expected: str, token: bytes) -> bool:
        return hmac.compare_digest(expected.encode("ascii"), token)

    def at(self, counter: int) -> str:
        return generate_code(self._key, counter, self.algorithm, self.digits)

    def verify(self, token: str, counter: int) -> bool:
        """
        Check ``token`` against every counter from ``counter - skew`` to
        ``counter + skew``, kept inside the int64 range. An empty or malformed
        token is simply rejected.
        """
        candidate = _token_bytes(token)
        if not candidate:
            return False
        first = max(counter - self.skew, INT64_MIN)
        last = min(counter + self.skew, INT64_MAX)
        for i in range(first, last + 1):
            if self._matches(self.at(i), candidate):
                return True
        return False

    def _key_uri(self, account: str, issuer: str, **fields) -> KeyURI:
        return KeyURI(
            type=self.type,
            label=make_label(account, issuer),
            issuer=quote_issuer(issuer),
            algorithm=self.algorithm.value,
            digits=int(self.digits),
            secret=self.secret,
            **fields,
        )

    def key_uri(self, account: str, issuer: str = "") -> KeyURI:
        """
        Describe this generator as a key URI labelled ``issuer:account``.
        An empty issuer gives a bare ``account`` label instead of ``:account``.
        """
        return self._key_uri(account, issuer, counter=self.counter, period=0)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._config!r}>"


class TOTP(HOTP):
    """Time-based generator; the moving factor is ``floor(unix_time / period)``."""

    type = OTPType.TOTP

    @property
    def period(self) -> int:
        return self._config.period

    def _time_counter(self, timestamp: Timestamp) -> int:
        return _unix_seconds(timestamp) // self.period

    def at(self, timestamp: Timestamp) -> str:
        return super().at(self._time_counter(timestamp))

    def now(self) -> str:
        return self.at(time.time())

    def expiration(self, timestamp: Timestamp) -> int:
        """Seconds left in the window; a window boundary leaves the full period."""
        return self.period - _unix_seconds(timestamp) % self.period

    def with_expiration(self, timestamp: Timestamp) -> Tuple[str, int]:
        seconds = _unix_seconds(timestamp)
        return self.at(seconds), self.expiration(seconds)

    def verify(self, token: str, timestamp: Timestamp) -> bool:
        candidate = _token_bytes(token)
        if not candidate:
            return False
        seconds = _unix_seconds(timestamp)
        for i in range(-self.skew, self.skew + 1):
            if self._matches(self.at(seconds + i * self.period), candidate):
                return True
        return False

    def key_uri(self, account: str, issuer: str = "") -> KeyURI:
        return self._key_uri(account, issuer, counter=0, period=self.period)
