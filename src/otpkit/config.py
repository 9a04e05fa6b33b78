"""
Generator configuration: algorithm, digit count, period, counter and skew.
"""

from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Callable, Union
import hashlib
import logging

from otpkit.errors import ConfigError

logger = logging.getLogger(__name__)

MIN_PERIOD = 10
MIN_SKEW = 0
DEFAULT_PERIOD = 30
DEFAULT_COUNTER = 1
DEFAULT_SKEW = 0

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class Algorithm(str, Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @classmethod
    def parse(cls, name: str) -> "Algorithm":
        """Case-insensitive lookup; an empty name means SHA1."""
        if isinstance(name, cls):
            return name
        key = str(name).upper() if name else ""
        if not key:
            return cls.SHA1
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown algorithm {name!r}") from None

    @property
    def hasher(self) -> Callable:
        return {
            Algorithm.SHA1: hashlib.sha1,
            Algorithm.SHA256: hashlib.sha256,
            Algorithm.SHA512: hashlib.sha512,
        }[self]

    def __str__(self) -> str:
        return self.value


class Digits(IntEnum):
    SIX = 6
    EIGHT = 8

    @classmethod
    def parse(cls, value: int) -> "Digits":
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"unsupported digit count {value!r}") from None

    def __str__(self) -> str:
        return str(self.value)


class OTPType(str, Enum):
    HOTP = "hotp"
    TOTP = "totp"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OTPConfig:
    """
    Immutable settings shared by every code a generator produces.

    ``period`` applies to TOTP only. ``counter`` applies to HOTP only and is
    informational: it is exported in key URIs but never used to generate a
    code. Out-of-range ``period`` and ``skew`` values are clamped to their
    minimum rather than rejected.
    """

    algorithm: Union[Algorithm, str] = Algorithm.SHA1
    digits: Union[Digits, int] = Digits.SIX
    period: int = DEFAULT_PERIOD
    counter: int = DEFAULT_COUNTER
    skew: int = DEFAULT_SKEW

    def __post_init__(self):
        try:
            algorithm = Algorithm.parse(self.algorithm)
            digits = Digits.parse(self.digits)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        period = int(self.period)
        if period < MIN_PERIOD:
            logger.debug("period %d below minimum, using %d", period, MIN_PERIOD)
            period = MIN_PERIOD
        skew = int(self.skew)
        if skew < MIN_SKEW:
            skew = MIN_SKEW

        # frozen dataclass, so normalized values go in through object.__setattr__
        object.__setattr__(self, "algorithm", algorithm)
        object.__setattr__(self, "digits", digits)
        object.__setattr__(self, "period", period)
        object.__setattr__(self, "counter", int(self.counter))
        object.__setattr__(self, "skew", skew)

    def replace(self, **changes) -> "OTPConfig":
        return replace(self, **changes)
