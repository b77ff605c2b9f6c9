"""
Multipart walking and part classification.

Walks the parts of a multipart message in document order, classifies each by
its own Content-Type and routes text/plain and text/html parts through
transfer decoding and charset transcoding. Nested multipart containers are
walked recursively; every other part (images, attachments, message/rfc822)
is skipped.
"""

from email import errors
from email.message import Message
from typing import Iterator, NamedTuple, Optional

import structlog

from ..config import Settings, settings as default_settings
from ..decoding.transfer import decode_part_body
from ..errors import MalformedMessageError, MissingBoundaryError
from ..models.header import MessageHeader
from ..models.media_type import MediaType
from ..models.message import StructuredMessage
from .body import raw_body
from .media_type import default_media_type, parse_media_type

logger = structlog.get_logger(__name__)

READABLE_TYPES = frozenset({"text/plain", "text/html"})


class Part(NamedTuple):
    """A readable MIME part, consumed once while building the message."""

    header: MessageHeader
    mediatype: MediaType
    body: bytes

    @property
    def transfer_encoding(self) -> Optional[str]:
        return self.header.get("Content-Transfer-Encoding")


def is_attachment(header: MessageHeader) -> bool:
    """
    Determine if a part is declared as an attachment.

    Args:
        header: Part header

    Returns:
        True if Content-Disposition is "attachment"
    """
    disposition = header.get("Content-Disposition", "")
    return disposition.split(";", 1)[0].strip().lower() == "attachment"


def _check_framing(container: Message, boundary: str, settings: Settings) -> None:
    for defect in container.defects:
        if isinstance(defect, errors.StartBoundaryNotFoundDefect):
            raise MalformedMessageError(f"Opening boundary {boundary!r} not found")
        if isinstance(defect, errors.CloseBoundaryNotFoundDefect) and settings.require_close_boundary:
            raise MalformedMessageError(f"Closing boundary {boundary!r} not found")

    if not isinstance(container.get_payload(), list):
        raise MalformedMessageError(f"No parts delimited by boundary {boundary!r}")


def iter_parts(
    container: Message, boundary: str, settings: Optional[Settings] = None
) -> Iterator[Part]:
    """
    Yield the readable parts of a multipart container in document order.

    Args:
        container: Parsed multipart message or part
        boundary: Boundary declared by the container's Content-Type
        settings: Settings override (defaults to global settings)

    Yields:
        Part for every text/plain and text/html part

    Raises:
        MalformedMessageError: If the boundary framing is broken
        MalformedContentTypeError: If a part Content-Type cannot be parsed
        MissingBoundaryError: If a nested multipart has no boundary
    """
    settings = settings or default_settings
    _check_framing(container, boundary, settings)
    container_type = container.get_content_type()

    for index, sub in enumerate(container.get_payload()):
        header = MessageHeader.from_message(sub)
        content_type = header.get("Content-Type")
        if content_type is None:
            mediatype = default_media_type(container_type)
        else:
            mediatype = parse_media_type(content_type)

        if mediatype.is_multipart():
            if not mediatype.boundary:
                raise MissingBoundaryError(mediatype.mediatype)
            yield from iter_parts(sub, mediatype.boundary, settings)
            continue

        if mediatype.mediatype not in READABLE_TYPES:
            logger.debug("Skipping part", index=index, mediatype=mediatype.mediatype)
            continue

        if settings.skip_attachment_parts and is_attachment(header):
            logger.debug("Skipping attachment part", index=index, mediatype=mediatype.mediatype)
            continue

        yield Part(header=header, mediatype=mediatype, body=raw_body(sub))


def build_structured_message(
    msg: Message,
    header: MessageHeader,
    boundary: str,
    settings: Optional[Settings] = None,
) -> StructuredMessage:
    """
    Build a StructuredMessage from a multipart message.

    When several text/plain (or text/html) parts occur, the last one in
    document order wins. A failure in any part aborts the whole build.

    Args:
        msg: Parsed multipart message
        header: Top-level header
        boundary: Top-level boundary parameter
        settings: Settings override (defaults to global settings)

    Returns:
        StructuredMessage with optional text and HTML payloads
    """
    settings = settings or default_settings
    text = None
    html = None

    for part in iter_parts(msg, boundary, settings):
        decoded = decode_part_body(
            part.body, part.transfer_encoding, part.mediatype.charset, settings=settings
        )
        if part.mediatype.subtype == "plain":
            text = decoded
        else:
            html = decoded

    return StructuredMessage(header=header, text=text, html=html)
