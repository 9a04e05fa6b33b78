"""
Error kinds raised by otpkit.

Only generator construction and key URI parsing can fail; verification
reports a bad candidate as ``False`` instead of raising.
"""


class OTPError(Exception):
    pass


class ConfigError(OTPError, ValueError):
    """An algorithm or digit count outside the supported set."""


class SecretError(OTPError, ValueError):
    pass


class EmptySecretError(SecretError):
    def __init__(self, message: str = "secret cannot be empty"):
        super().__init__(message)


class SecretDecodeError(SecretError):
    def __init__(self, message: str = "secret base32 decode error"):
        super().__init__(message)


class URIFormatError(OTPError, ValueError):
    """Raised for any malformed or unsupported otpauth:// URI."""

    def __init__(self, reason: str = ""):
        self.reason = reason
        message = "uri format error"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EntropyError(OTPError):
    def __init__(self, message: str = "system random source unavailable"):
        super().__init__(message)
