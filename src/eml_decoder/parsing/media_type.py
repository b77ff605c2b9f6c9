"""
Content-Type parsing.

Parses a media type value into a MediaType: a lowercased type/subtype and its
parameters, with quoted strings unescaped and RFC 2231 extended parameters
(name*=charset'lang'value, name*0=..., name*1=...) collapsed into one value.
"""

import re
from email.utils import collapse_rfc2231_value, decode_params, quote, unquote
from typing import List, Optional, Tuple

from ..errors import MalformedContentTypeError
from ..models.media_type import MediaType

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_TYPE_RE = re.compile(rf"({_TOKEN})/({_TOKEN})")
_PARAM_RE = re.compile(
    rf';\s*({_TOKEN})\s*=\s*("(?:[^"\\]|\\.)*"|[^;\s"]+)\s*', re.DOTALL
)
_QUOTED_PAIR_RE = re.compile(r"\\(.)", re.DOTALL)


def default_media_type(container: Optional[str] = None) -> MediaType:
    """
    Return the media type of a message or part without Content-Type.

    RFC 2045 defaults to text/plain; charset=us-ascii, RFC 2046 makes parts
    of multipart/digest message/rfc822. A new instance is built on each call.

    Args:
        container: Media type of the enclosing multipart, if any
    """
    if container == "multipart/digest":
        return MediaType(mediatype="message/rfc822")
    return MediaType(mediatype="text/plain", params={"charset": "us-ascii"})


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return _QUOTED_PAIR_RE.sub(r"\1", value[1:-1])
    return value


def _collapse(value) -> str:
    # Extended values come back as (charset, language, quoted text)
    if isinstance(value, tuple):
        charset, language, text = value
        value = (charset or "utf-8", language, unquote(text))
    return collapse_rfc2231_value(value)


def parse_media_type(value: Optional[str]) -> MediaType:
    """
    Parse a Content-Type header value.

    Args:
        value: Raw header value, e.g. 'text/plain; charset="ISO-2022-JP"'

    Returns:
        MediaType with lowercased type and parameter names

    Raises:
        MalformedContentTypeError: If the value is empty, the type is not
            type/subtype, a parameter is malformed, repeated or mixes
            numbered and unnumbered RFC 2231 sections
    """
    if value is None or not value.strip():
        raise MalformedContentTypeError(value, "no media type")

    head = value.split(";", 1)[0]
    if _TYPE_RE.fullmatch(head.strip()) is None:
        raise MalformedContentTypeError(value, "invalid media type")
    mediatype = head.strip().lower()

    raw_params: List[Tuple[str, str]] = []
    seen = set()
    pos = len(head)
    while pos < len(value):
        match = _PARAM_RE.match(value, pos)
        if match is None:
            if value[pos:].strip() in ("", ";"):
                break
            raise MalformedContentTypeError(
                value, f"invalid media parameter {value[pos:].strip()!r}"
            )
        name = match.group(1).lower()
        if name in seen:
            raise MalformedContentTypeError(value, f"duplicate parameter {name!r}")
        seen.add(name)
        raw_params.append((name, '"%s"' % quote(_unquote(match.group(2)))))
        pos = match.end()

    numbered = {}
    for name, _ in raw_params:
        base, star, suffix = name.partition("*")
        if star:
            numbered.setdefault(base, set()).add(suffix.rstrip("*").isdigit())
    for base, kinds in numbered.items():
        if len(kinds) > 1:
            raise MalformedContentTypeError(value, f"conflicting parameter {base!r}")

    decoded = decode_params([(mediatype, "")] + raw_params)[1:]
    return MediaType(
        mediatype=mediatype, params={name: _collapse(val) for name, val in decoded}
    )
