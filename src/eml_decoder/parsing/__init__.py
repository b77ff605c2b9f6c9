# Message parsing module

from .mail_parser import (
    build_plain_message,
    parse_mail,
    parse_mail_bytes,
    parse_mail_file,
    read_message,
)
from .media_type import default_media_type, parse_media_type
from .multipart import Part, build_structured_message, is_attachment, iter_parts

__all__ = [
    "parse_mail",
    "parse_mail_bytes",
    "parse_mail_file",
    "read_message",
    "build_plain_message",
    "build_structured_message",
    "iter_parts",
    "is_attachment",
    "Part",
    "parse_media_type",
    "default_media_type",
]
