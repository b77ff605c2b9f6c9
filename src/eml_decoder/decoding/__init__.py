# Transfer-encoding and charset decoding

from .charset import (
    CANONICAL_ENCODING,
    guess_charset,
    lookup_decoder,
    register_charset,
    transcode,
)
from .transfer import (
    decode_part_body,
    normalize_transfer_encoding,
    strip_transfer_encoding,
)

__all__ = [
    "CANONICAL_ENCODING",
    "transcode",
    "register_charset",
    "lookup_decoder",
    "guess_charset",
    "decode_part_body",
    "normalize_transfer_encoding",
    "strip_transfer_encoding",
]
