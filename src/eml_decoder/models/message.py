"""
Decoded message models - the result of a parse call.

A decoded message is either a PlainMessage (single text part) or a
StructuredMessage (multipart container with optional text and HTML payloads).
The two variants are discriminated by `kind`. Payloads are UTF-8 bytes.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .header import MessageHeader


class PlainMessage(BaseModel):
    """Single-part text message."""

    kind: Literal["plain"] = "plain"
    header: MessageHeader = Field(description="Top-level header block")
    text: bytes = Field(description="Decoded body, UTF-8")

    model_config = {"frozen": True}

    def has_text(self) -> bool:
        return True

    def has_html(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.text.decode("utf-8", errors="replace")


class StructuredMessage(BaseModel):
    """
    Multipart message reduced to its readable parts.

    `text` and `html` are None when the message carried no such part; an
    empty part is b"".
    """

    kind: Literal["structured"] = "structured"
    header: MessageHeader = Field(description="Top-level header block")
    text: Optional[bytes] = Field(None, description="Last text/plain part, UTF-8")
    html: Optional[bytes] = Field(None, description="Last text/html part, UTF-8")

    model_config = {"frozen": True}

    def has_text(self) -> bool:
        return self.text is not None

    def has_html(self) -> bool:
        return self.html is not None

    def __str__(self) -> str:
        if self.text is None:
            return ""
        return self.text.decode("utf-8", errors="replace")


DecodedMessage = Annotated[
    Union[PlainMessage, StructuredMessage], Field(discriminator="kind")
]
