"""
Mail message parser - decoding pipeline entry point.

Reads a raw RFC 822 message, parses its header block with the standard library
email parser and dispatches on the top-level Content-Type:
multipart/* -> StructuredMessage, text/* -> PlainMessage, anything else is
unsupported.
"""

import re
from email import errors
from email.message import Message
from email.parser import BytesParser
from email.policy import compat32
from typing import BinaryIO, Optional, Union

import structlog

from ..config import Settings, settings as default_settings
from ..decoding.charset import transcode
from ..decoding.transfer import decode_part_body
from ..errors import (
    MalformedMessageError,
    MessageTooLargeError,
    MissingBoundaryError,
    UnsupportedMediaTypeError,
)
from ..models.header import MessageHeader
from ..models.media_type import MediaType
from ..models.message import DecodedMessage, PlainMessage
from .body import raw_body
from .media_type import default_media_type, parse_media_type
from .multipart import build_structured_message

logger = structlog.get_logger(__name__)

_READ_CHUNK_SIZE = 64 * 1024
_SEPARATOR_RE = re.compile(rb"\r?\n\r?\n")
_FATAL_HEADER_DEFECTS = (
    errors.MissingHeaderBodySeparatorDefect,
    errors.FirstHeaderLineIsContinuationDefect,
)


def _read_limited(source: Union[bytes, bytearray, BinaryIO], limit: int) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        chunks = []
        total = 0
        while total <= limit:
            chunk = source.read(_READ_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)
        data = b"".join(chunks)

    if len(data) > limit:
        raise MessageTooLargeError(len(data), limit)
    return data


def read_message(
    source: Union[bytes, bytearray, BinaryIO], settings: Optional[Settings] = None
) -> Message:
    """
    Read and parse the header block of a raw message.

    Args:
        source: Raw message bytes or readable binary stream
        settings: Settings override (defaults to global settings)

    Returns:
        Parsed email.message.Message

    Raises:
        MessageTooLargeError: If the input exceeds max_message_size_mb
        MalformedMessageError: If the header block cannot be parsed
    """
    settings = settings or default_settings
    data = _read_limited(source, settings.max_message_size_bytes)

    if not (data.startswith((b"\n", b"\r\n")) or _SEPARATOR_RE.search(data)):
        raise MalformedMessageError("Missing header/body separator")

    msg = BytesParser(policy=compat32).parsebytes(data)
    for defect in msg.defects:
        if isinstance(defect, _FATAL_HEADER_DEFECTS):
            raise MalformedMessageError(f"Invalid header block: {defect.__class__.__name__}")
    return msg


def build_plain_message(
    msg: Message,
    header: MessageHeader,
    mediatype: MediaType,
    settings: Optional[Settings] = None,
) -> PlainMessage:
    """
    Build a PlainMessage from a single-part text message.

    The body is transcoded from the top-level charset. Its transfer encoding
    is only stripped when decode_top_level_transfer_encoding is enabled.

    Args:
        msg: Parsed message
        header: Top-level header
        mediatype: Parsed top-level Content-Type
        settings: Settings override (defaults to global settings)

    Returns:
        PlainMessage with the decoded body
    """
    settings = settings or default_settings
    body = raw_body(msg)

    if settings.decode_top_level_transfer_encoding:
        text = decode_part_body(
            body, header.get("Content-Transfer-Encoding"), mediatype.charset, settings=settings
        )
    else:
        text = transcode(body, mediatype.charset, settings=settings)

    return PlainMessage(header=header, text=text)


def parse_mail(
    source: Union[bytes, bytearray, BinaryIO], settings: Optional[Settings] = None
) -> DecodedMessage:
    """
    Parse a raw RFC 822 message into a decoded message.

    Args:
        source: Raw message bytes or readable binary stream (read to the end,
            not closed)
        settings: Settings override (defaults to global settings)

    Returns:
        PlainMessage for text/* messages, StructuredMessage for multipart/*

    Raises:
        MalformedMessageError: If the header block or multipart framing is broken
        MalformedContentTypeError: If a Content-Type cannot be parsed
        MissingBoundaryError: If a multipart type has no boundary
        UnsupportedMediaTypeError: If the top-level type is not text or multipart
        UnsupportedTransferEncodingError: If a part uses an unknown transfer encoding
        DecodeError: If a payload is invalid for its encoding or charset
    """
    settings = settings or default_settings
    msg = read_message(source, settings)
    header = MessageHeader.from_message(msg)

    content_type = header.get("Content-Type")
    mediatype = default_media_type() if content_type is None else parse_media_type(content_type)
    logger.debug("Message headers parsed", mediatype=mediatype.mediatype, header_count=len(header))

    if mediatype.is_multipart():
        if not mediatype.boundary:
            raise MissingBoundaryError(mediatype.mediatype)
        message = build_structured_message(msg, header, mediatype.boundary, settings)
    elif mediatype.is_text():
        message = build_plain_message(msg, header, mediatype, settings)
    else:
        raise UnsupportedMediaTypeError(mediatype.mediatype)

    logger.debug(
        "Message decoded",
        kind=message.kind,
        has_text=message.has_text(),
        has_html=message.has_html(),
    )
    return message


def parse_mail_bytes(data: bytes, settings: Optional[Settings] = None) -> DecodedMessage:
    """
    Parse raw message bytes.

    Args:
        data: Raw .eml bytes
        settings: Settings override (defaults to global settings)

    Returns:
        Decoded message
    """
    return parse_mail(data, settings)


def parse_mail_file(path: str, settings: Optional[Settings] = None) -> DecodedMessage:
    """
    Parse a .eml file.

    Args:
        path: Path to .eml file
        settings: Settings override (defaults to global settings)

    Returns:
        Decoded message

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    with open(path, "rb") as f:
        return parse_mail(f, settings)
