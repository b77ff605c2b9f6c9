"""
Charset transcoding into the canonical UTF-8 encoding.

Only a fixed, extensible set of legacy charsets is transcoded. Any other
declared charset (utf-8, us-ascii, a typo, nothing at all) passes through
unchanged: messages declaring utf-8 or omitting the parameter must not be
penalized.
"""

import codecs
from typing import BinaryIO, Dict, Optional, Union

import charset_normalizer
import structlog

from ..config import Settings, settings as default_settings
from ..errors import DecodeError

logger = structlog.get_logger(__name__)

CANONICAL_ENCODING = "utf-8"

# Declared charset name (lowercase) -> Python codec name. Shift_JIS labels
# decode as cp932 (NEC and IBM extensions); ISO-2022-JP also accepts JIS X 0201
# half-width katakana.
_DECODERS: Dict[str, str] = {
    "iso-2022-jp": "iso2022_jp_ext",
    "csiso2022jp": "iso2022_jp_ext",
    "shift_jis": "cp932",
    "shift-jis": "cp932",
    "sjis": "cp932",
    "x-sjis": "cp932",
    "ms_kanji": "cp932",
    "euc-jp": "euc_jp",
    "euc_jp": "euc_jp",
    "x-euc-jp": "euc_jp",
    "cp932": "cp932",
    "windows-31j": "cp932",
}


def register_charset(name: str, codec: str) -> None:
    """
    Register a charset name to be transcoded with a Python codec.

    Args:
        name: Charset name as declared in Content-Type (case-insensitive)
        codec: Python codec name, e.g. "iso2022_jp" or "gb18030"

    Raises:
        LookupError: If the codec is unknown to Python
    """
    codecs.lookup(codec)
    _DECODERS[name.strip().lower()] = codec


def lookup_decoder(charset: Optional[str]) -> Optional[str]:
    """
    Return the codec used for `charset`, or None when it passes through.

    Args:
        charset: Declared charset name, any case

    Returns:
        Python codec name or None
    """
    if not charset:
        return None
    return _DECODERS.get(charset.strip().lower())


def guess_charset(data: bytes) -> Optional[str]:
    """
    Guess the charset of undeclared bytes using charset-normalizer.

    Args:
        data: Raw payload bytes

    Returns:
        Detected encoding name or None
    """
    if not data:
        return None
    detected = charset_normalizer.from_bytes(data).best()
    if detected:
        return detected.encoding
    return None


def _read_all(source: Union[bytes, bytearray, BinaryIO]) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    return source.read()


def transcode(
    source: Union[bytes, bytearray, BinaryIO],
    charset: Optional[str],
    settings: Optional[Settings] = None,
) -> bytes:
    """
    Transcode a payload from its declared charset into UTF-8.

    The source stream is read to completion.

    Args:
        source: Payload bytes or a readable binary stream
        charset: Declared charset name (case-insensitive), may be None
        settings: Settings override (defaults to global settings)

    Returns:
        UTF-8 bytes, or the source bytes unchanged for unrecognized charsets

    Raises:
        DecodeError: If the bytes are invalid for the declared charset
        OSError: If reading the stream fails
    """
    settings = settings or default_settings
    data = _read_all(source)

    codec = lookup_decoder(charset)
    if codec is None:
        if settings.detect_undeclared_charset:
            _log_undeclared_guess(data, charset)
        return data

    try:
        text = data.decode(codec, errors=settings.charset_errors)
    except UnicodeDecodeError as e:
        raise DecodeError(charset, str(e)) from e
    return text.encode(CANONICAL_ENCODING)


def _log_undeclared_guess(data: bytes, charset: Optional[str]) -> None:
    try:
        data.decode(CANONICAL_ENCODING)
        return
    except UnicodeDecodeError:
        pass
    logger.warning(
        "Payload is not UTF-8 and its charset is not transcoded",
        declared_charset=charset,
        guessed_charset=guess_charset(data),
        size_bytes=len(data),
    )
