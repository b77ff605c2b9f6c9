"""
Message header model.

The header block is kept as an ordered sequence of (name, value) pairs so that
repeated fields (Received, To, ...) survive, while lookups stay
case-insensitive as RFC 5322 requires.
"""

import re
from datetime import datetime
from email.errors import HeaderParseError
from email.header import decode_header, make_header
from email.message import Message
from email.utils import formataddr, getaddresses, parsedate_to_datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from ..errors import AddressListError, MalformedHeaderError

# RFC 5322 unfolding: a line break followed by whitespace is removed
_FOLD_RE = re.compile(r"\r?\n(?=[ \t])")


def _unfold(value: str) -> str:
    return _FOLD_RE.sub("", value)


def _to_text(value) -> str:
    """Turn a raw header value (possibly carrying 8-bit surrogates) into text."""
    value = str(value)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # Raw 8-bit header bytes, assume UTF-8
        value = value.encode("ascii", "surrogateescape").decode("utf-8", errors="replace")
    return value


def decode_words(value: str) -> str:
    """
    Decode RFC 2047 encoded-words in a header value.

    Values that cannot be decoded (unknown charset, broken encoded-word) are
    returned unchanged.
    """
    if not value or "=?" not in value:
        return value
    try:
        return str(make_header(decode_header(value)))
    except (HeaderParseError, LookupError, UnicodeDecodeError):
        return value


class Address(BaseModel):
    """A single mailbox from an address-list header."""

    name: str = Field("", description="Display name, encoded-words decoded")
    address: str = Field(description="addr-spec, e.g. user@example.com")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return formataddr((self.name, self.address))


class MessageHeader(BaseModel):
    """Ordered, case-insensitive view over a message header block."""

    fields: Tuple[Tuple[str, str], ...] = Field(
        default=(), description="(name, value) pairs in document order"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_message(cls, msg: Message) -> "MessageHeader":
        return cls(
            fields=tuple(
                (name, _unfold(_to_text(value))) for name, value in msg.raw_items()
            )
        )

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value of field `name`, or `default`."""
        wanted = name.lower()
        for key, value in self.fields:
            if key.lower() == wanted:
                return value
        return default

    def get_all(self, name: str) -> List[str]:
        """Return every value of a repeated field, in document order."""
        wanted = name.lower()
        return [value for key, value in self.fields if key.lower() == wanted]

    def keys(self) -> List[str]:
        return [key for key, _ in self.fields]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self.fields)

    def decoded(self, name: str, default: str = "") -> str:
        """Return the first value of `name` with encoded-words decoded."""
        value = self.get(name)
        if value is None:
            return default
        return decode_words(value)

    def address_list(self, name: str) -> List[Address]:
        """
        Parse an address-list field such as From, To or Cc.

        All occurrences of a repeated field are combined. A field that is not
        present yields an empty list.

        Raises:
            AddressListError: If any entry is not a valid mailbox
        """
        values = self.get_all(name)
        if not values:
            return []

        parsed = getaddresses(values)
        if not parsed:
            raise AddressListError(name, "empty address list")

        addresses = []
        for display_name, addr in parsed:
            if not addr or "@" not in addr:
                raise AddressListError(name, f"invalid address list {', '.join(values)!r}")
            addresses.append(Address(name=decode_words(display_name), address=addr))
        return addresses

    def date(self) -> Optional[datetime]:
        """
        Parse the Date field.

        Raises:
            MalformedHeaderError: If the Date value is not an RFC 5322 date
        """
        value = self.get("Date")
        if value is None:
            return None
        try:
            return parsedate_to_datetime(value)
        except (TypeError, ValueError) as e:
            raise MalformedHeaderError("Date", str(e)) from e
