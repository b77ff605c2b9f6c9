"""Raw body access on parsed email.message.Message objects."""

from email.message import Message


def raw_body(msg: Message) -> bytes:
    """
    Return the undecoded body bytes of a non-multipart message or part.

    BytesParser keeps 8-bit body bytes as surrogate escapes in the str
    payload; they are restored here byte for byte. The stored payload is read
    directly: compat32 get_payload() would re-decode those bytes with the
    declared charset and replace anything it cannot map.

    Args:
        msg: Parsed non-multipart message or part

    Returns:
        Body bytes exactly as they appeared on the wire
    """
    payload = msg._payload
    if payload is None:
        return b""
    if isinstance(payload, bytes):
        return payload
    return payload.encode("utf-8", "surrogateescape")
