"""Shared secrets and reference vectors for the test suite."""

from otpkit import b32encode

SECRET20 = "J3W2XPZP5HDYXYRB4HS6ZLU6M6VBO6C6"
SECRET32 = "K2KE5WEAW2IIASRZYEPEQI2JAR73LSRM5HQOXBAWZEIHSULURI4A"
SECRET64 = "RJX2JMKSDPMS6OFJTRA3TXUNYMG2VCMGO3S7DQA2I34PTPON5DFWGEI6QXEXMJYUNEXCVLR7W2AX7AO52QNTG2TK5EWJ26JROIP6GBI"

# 2024/01/01 10:10:00 in milliseconds, fed to TOTP as seconds
TIMESTAMP = 1704075000000

# RFC 4226 / RFC 6238 reference keys
RFC_SHA1 = b32encode(b"12345678901234567890")
RFC_SHA256 = b32encode(b"12345678901234567890123456789012")
RFC_SHA512 = b32encode(b"1234567890123456789012345678901234567890123456789012345678901234")
