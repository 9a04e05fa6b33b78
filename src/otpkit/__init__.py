"""
otpkit - generate and verify HOTP/TOTP one-time passwords and read or write
the otpauth:// key URIs used by authenticator apps.
"""

from otpkit.config import (Algorithm, Digits, OTPConfig, OTPType,
                           DEFAULT_COUNTER, DEFAULT_PERIOD, MIN_PERIOD, MIN_SKEW)
from otpkit.errors import (ConfigError, EmptySecretError, EntropyError,
                           OTPError, SecretDecodeError, SecretError,
                           URIFormatError)
from otpkit.keyuri import KeyURI, from_uri, make_label, quote_issuer
from otpkit.otp import HOTP, TOTP, encode_moving_factor, generate_code
from otpkit.secret import (DEFAULT_SECRET_LENGTH, b32decode, b32encode,
                           random_base32, random_secret)

__version__ = "0.1.0"

__all__ = [
    "HOTP",
    "TOTP",
    "KeyURI",
    "OTPConfig",
    "Algorithm",
    "Digits",
    "OTPType",
    "from_uri",
    "make_label",
    "quote_issuer",
    "generate_code",
    "encode_moving_factor",
    "random_secret",
    "random_base32",
    "b32encode",
    "b32decode",
    "OTPError",
    "ConfigError",
    "SecretError",
    "EmptySecretError",
    "SecretDecodeError",
    "URIFormatError",
    "EntropyError",
    "DEFAULT_COUNTER",
    "DEFAULT_PERIOD",
    "DEFAULT_SECRET_LENGTH",
    "MIN_PERIOD",
    "MIN_SKEW",
]
