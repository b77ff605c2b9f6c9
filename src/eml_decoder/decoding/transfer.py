"""
Content-Transfer-Encoding decoding.

Strips the transport encoding of a MIME part body before the charset is
transcoded. base64 and quoted-printable are decoded; 7bit, 8bit and binary
are identity encodings (RFC 2045).
"""

import base64
import binascii
import quopri
import re
from typing import Optional

import structlog

from ..config import Settings, settings as default_settings
from ..errors import DecodeError, UnsupportedTransferEncodingError
from .charset import transcode

logger = structlog.get_logger(__name__)

DEFAULT_TRANSFER_ENCODING = "7bit"
IDENTITY_ENCODINGS = frozenset({"7bit", "8bit", "binary"})

_WHITESPACE_RE = re.compile(rb"\s+")


def normalize_transfer_encoding(value: Optional[str]) -> str:
    """
    Normalize a Content-Transfer-Encoding header value.

    Args:
        value: Raw header value, may be None

    Returns:
        Lowercased mechanism without parameters; "7bit" when absent
    """
    if value is None:
        return DEFAULT_TRANSFER_ENCODING
    mechanism = value.split(";", 1)[0].strip().lower()
    return mechanism or DEFAULT_TRANSFER_ENCODING


def _decode_base64(body: bytes) -> bytes:
    try:
        return base64.b64decode(_WHITESPACE_RE.sub(b"", body), validate=True)
    except binascii.Error as e:
        raise DecodeError("base64", str(e)) from e


def strip_transfer_encoding(body: bytes, encoding: str) -> bytes:
    """
    Remove the transfer encoding from a part body.

    Args:
        body: Raw part body
        encoding: Normalized transfer encoding name

    Returns:
        Decoded bytes (still in the part's charset)

    Raises:
        DecodeError: If a base64 body is malformed
        UnsupportedTransferEncodingError: For unknown encodings
    """
    if encoding == "base64":
        return _decode_base64(body)
    if encoding == "quoted-printable":
        return quopri.decodestring(body)
    if encoding in IDENTITY_ENCODINGS:
        return body
    raise UnsupportedTransferEncodingError(encoding)


def decode_part_body(
    body: bytes,
    transfer_encoding: Optional[str],
    charset: Optional[str],
    settings: Optional[Settings] = None,
) -> bytes:
    """
    Decode a part body: strip its transfer encoding, then transcode to UTF-8.

    With `transcode_quoted_printable` disabled, quoted-printable bodies are
    returned raw, neither unescaped nor transcoded.

    Args:
        body: Raw part body
        transfer_encoding: Content-Transfer-Encoding value, may be None
        charset: Declared charset of the part, may be None
        settings: Settings override (defaults to global settings)

    Returns:
        UTF-8 payload bytes
    """
    settings = settings or default_settings
    encoding = normalize_transfer_encoding(transfer_encoding)

    if encoding == "quoted-printable" and not settings.transcode_quoted_printable:
        logger.debug("Returning quoted-printable body undecoded", size_bytes=len(body))
        return body

    return transcode(strip_transfer_encoding(body, encoding), charset, settings=settings)
