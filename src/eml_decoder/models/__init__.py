# Data models for the decoding pipeline

from .header import Address, MessageHeader
from .media_type import MediaType
from .message import DecodedMessage, PlainMessage, StructuredMessage

__all__ = [
    "Address",
    "MessageHeader",
    "MediaType",
    "DecodedMessage",
    "PlainMessage",
    "StructuredMessage",
]
