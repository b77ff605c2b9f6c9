"""
Error taxonomy for the decoding pipeline.

Every error aborts the parse call that raised it. Header field errors
(MalformedHeaderError, AddressListError) are only raised by the header
accessors after a successful parse, so callers may log them and continue.
"""

from typing import Optional


class MailDecodeError(ValueError):
    """Base class for all decoder errors."""


class MalformedMessageError(MailDecodeError):
    """Header block or multipart framing cannot be parsed."""


class MessageTooLargeError(MailDecodeError):
    """Raw message exceeds the configured size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Message size exceeds limit: more than {limit_bytes} bytes"
        )


class MalformedContentTypeError(MailDecodeError):
    """A Content-Type value is not a valid media type."""

    def __init__(self, value: Optional[str], reason: str = "invalid media type"):
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed Content-Type {value!r}: {reason}")


class MissingBoundaryError(MailDecodeError):
    """A multipart media type was declared without a boundary parameter."""

    def __init__(self, mediatype: str):
        self.mediatype = mediatype
        super().__init__(f"Missing boundary parameter for {mediatype}")


class UnsupportedMediaTypeError(MailDecodeError):
    """Top-level media type is neither text/* nor multipart/*."""

    def __init__(self, mediatype: str):
        self.mediatype = mediatype
        super().__init__(f"Unsupported Media Type: {mediatype}")


class UnsupportedTransferEncodingError(MailDecodeError):
    """Content-Transfer-Encoding is not one this decoder knows."""

    def __init__(self, encoding: str):
        self.encoding = encoding
        super().__init__(f"Unsupported Content Transfer Encoding: {encoding}")


class DecodeError(MailDecodeError):
    """Payload bytes are invalid for their transfer encoding or charset."""

    def __init__(self, encoding: str, reason: str):
        self.encoding = encoding
        self.reason = reason
        super().__init__(f"Cannot decode {encoding} payload: {reason}")


class MalformedHeaderError(MailDecodeError):
    """A structured header field cannot be parsed."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed {field} header: {reason}")


class AddressListError(MalformedHeaderError):
    """An address-list header field (From, To, Cc, ...) cannot be parsed."""
