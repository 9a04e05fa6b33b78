"""
otpauth:// key URIs, as imported by authenticator apps.

See https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

from dataclasses import dataclass
from typing import Dict
from urllib.parse import parse_qsl, quote, quote_plus, unquote, urlsplit
import io
import logging
import re

import qrcode

from otpkit.config import (Algorithm, DEFAULT_COUNTER, DEFAULT_PERIOD, Digits,
                           INT64_MAX, INT64_MIN, MIN_PERIOD, OTPType)
from otpkit.errors import URIFormatError

logger = logging.getLogger(__name__)

SCHEME = "otpauth"

_int_re = re.compile(r"[+-]?[0-9]+")
_bad_escape_re = re.compile(r"%(?![0-9A-Fa-f]{2})")


def make_label(account: str, issuer: str = "") -> str:
    """
    Path-escape ``issuer:account``.

    Without an issuer the label is the bare account, not ``:account``.
    """
    label = f"{issuer}:{account}" if issuer else account
    return quote(label, safe="$&+:=@")


def quote_issuer(issuer: str) -> str:
    return quote_plus(issuer, safe="")


@dataclass(frozen=True)
class KeyURI:
    """
    Parameters carried by an otpauth:// URI.

    ``label`` and ``issuer`` are written out verbatim by :meth:`uri`, so they
    must already be escaped (see :func:`make_label` and :func:`quote_issuer`).
    ``counter`` means nothing for TOTP and ``period`` nothing for HOTP; both
    are pinned to 0 for the type they don't apply to.
    """

    type: OTPType
    label: str = ""
    issuer: str = ""
    algorithm: str = Algorithm.SHA1.value
    digits: int = Digits.SIX.value
    counter: int = DEFAULT_COUNTER
    period: int = DEFAULT_PERIOD
    secret: str = ""

    def __post_init__(self):
        try:
            otp_type = OTPType(self.type)
        except ValueError:
            raise URIFormatError(f"unknown otp type {self.type!r}") from None
        object.__setattr__(self, "type", otp_type)
        if otp_type is OTPType.HOTP:
            object.__setattr__(self, "period", 0)
        else:
            object.__setattr__(self, "counter", 0)

    def uri(self) -> str:
        """Render the URI; parameters are ordered secret, issuer, algorithm, digits, period/counter."""
        params = [f"secret={self.secret}", f"issuer={self.issuer}"]
        if self.algorithm != Algorithm.SHA1.value:
            params.append(f"algorithm={self.algorithm}")
        if self.digits != Digits.SIX:
            params.append(f"digits={self.digits}")
        if self.type is OTPType.TOTP:
            if self.period != DEFAULT_PERIOD:
                params.append(f"period={self.period}")
        else:
            params.append(f"counter={self.counter}")

        path = self.label
        if path and not path.startswith("/"):
            path = "/" + path
        return f"{SCHEME}://{self.type.value}{path}?{'&'.join(params)}"

    def __str__(self) -> str:
        return self.uri()

    def qr_code(self, box_size: int = 10, border: int = 4) -> bytes:
        """Render :meth:`uri` as a QR code and return the PNG bytes."""
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_H,
            box_size=box_size,
            border=border,
        )
        qr.add_data(self.uri())
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer)
        return buffer.getvalue()

    def to_otp(self, **options):
        """Build the HOTP or TOTP generator this URI describes."""
        from otpkit.otp import HOTP, TOTP

        settings = dict(algorithm=self.algorithm, digits=self.digits)
        if self.type is OTPType.HOTP:
            factory = HOTP
            settings["counter"] = self.counter
        else:
            factory = TOTP
            settings["period"] = self.period
        settings.update(options)
        return factory(self.secret, **settings)

    @classmethod
    def from_uri(cls, uri: str) -> "KeyURI":
        return from_uri(uri)


def _uri_error(reason: str) -> URIFormatError:
    logger.debug("rejected otpauth uri: %s", reason)
    return URIFormatError(reason)


def _parse_int(params: Dict[str, str], name: str, default: int) -> int:
    value = params.get(name)
    if not value:
        return default
    if not _int_re.fullmatch(value):
        raise _uri_error(f"malformed {name!r} parameter")
    number = int(value)
    if not INT64_MIN <= number <= INT64_MAX:
        raise _uri_error(f"{name!r} parameter out of range")
    return number


def from_uri(uri: str) -> KeyURI:
    """
    Parse an otpauth:// URI.

    Validation is strict: the scheme, the type, ``secret`` and the optional
    ``digits``, ``period``, ``counter`` and ``algorithm`` parameters must all
    be well formed, otherwise :class:`URIFormatError` is raised.

    The issuer may be given as a ``issuer:`` label prefix, as the ``issuer``
    parameter, or both. When only one is present the other is filled in:
    a prefix becomes the issuer, and a bare label gets ``issuer:`` prepended.
    """
    try:
        parts = urlsplit(uri)
    except (TypeError, ValueError) as exc:
        raise _uri_error("unparsable uri") from exc

    if parts.scheme != SCHEME:
        raise _uri_error("wrong uri scheme")
    try:
        otp_type = OTPType(parts.netloc)
    except ValueError:
        raise _uri_error("unknown otp type") from None
    if _bad_escape_re.search(parts.path):
        raise _uri_error("malformed label escape")

    params: Dict[str, str] = {}
    for key, value in parse_qsl(parts.query):
        params.setdefault(key, value)

    secret = params.get("secret")
    if not secret:
        raise _uri_error("missing 'secret' parameter")

    digits = _parse_int(params, "digits", Digits.SIX.value)
    try:
        digits = Digits.parse(digits)
    except ValueError:
        raise _uri_error("unsupported 'digits' parameter") from None

    period = _parse_int(params, "period", DEFAULT_PERIOD)
    if period < MIN_PERIOD:
        raise _uri_error(f"'period' must be at least {MIN_PERIOD}")

    counter = _parse_int(params, "counter", DEFAULT_COUNTER)

    try:
        algorithm = Algorithm.parse(params.get("algorithm", ""))
    except ValueError:
        raise _uri_error("unsupported 'algorithm' parameter") from None

    issuer = params.get("issuer", "")
    path = unquote(parts.path)
    label = path[1:] if path.startswith("/") else path
    # issuer and account may not themselves contain ':'
    if not issuer and ":" in label:
        prefix = label.split(":", 1)[0]
        issuer = prefix[1:] if prefix.startswith(" ") else prefix
    elif issuer and ":" not in label:
        label = f"{issuer}:{label}"

    return KeyURI(
        type=otp_type,
        label=label,
        issuer=issuer,
        algorithm=algorithm.value,
        digits=int(digits),
        counter=counter,
        period=period,
        secret=secret,
    )
