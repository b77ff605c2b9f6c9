"""
eml_decoder - decode raw RFC 822 mail into UTF-8 text and HTML payloads.
"""

from .decoding import register_charset, transcode
from .errors import (
    AddressListError,
    DecodeError,
    MailDecodeError,
    MalformedContentTypeError,
    MalformedHeaderError,
    MalformedMessageError,
    MessageTooLargeError,
    MissingBoundaryError,
    UnsupportedMediaTypeError,
    UnsupportedTransferEncodingError,
)
from .models import (
    Address,
    DecodedMessage,
    MediaType,
    MessageHeader,
    PlainMessage,
    StructuredMessage,
)
from .parsing import parse_mail, parse_mail_bytes, parse_mail_file, parse_media_type

__version__ = "0.1.0"

__all__ = [
    "parse_mail",
    "parse_mail_bytes",
    "parse_mail_file",
    "parse_media_type",
    "transcode",
    "register_charset",
    "Address",
    "DecodedMessage",
    "MediaType",
    "MessageHeader",
    "PlainMessage",
    "StructuredMessage",
    "MailDecodeError",
    "MalformedMessageError",
    "MessageTooLargeError",
    "MalformedContentTypeError",
    "MissingBoundaryError",
    "UnsupportedMediaTypeError",
    "UnsupportedTransferEncodingError",
    "DecodeError",
    "MalformedHeaderError",
    "AddressListError",
]
