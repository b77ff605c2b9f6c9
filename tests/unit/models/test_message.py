"""
Unit tests for decoded message models (message.py, media_type.py).
"""

import pytest
from pydantic import TypeAdapter, ValidationError

from eml_decoder.models import (
    DecodedMessage,
    MediaType,
    MessageHeader,
    PlainMessage,
    StructuredMessage,
)

HEADER = MessageHeader(fields=(("Subject", "hi"),))


class TestPlainMessage:
    """Tests for PlainMessage."""

    @pytest.mark.unit
    def test_accessors(self):
        """Test capability accessors and string form."""
        message = PlainMessage(header=HEADER, text="héllo".encode("utf-8"))
        assert message.kind == "plain"
        assert message.has_text()
        assert not message.has_html()
        assert str(message) == "héllo"

    @pytest.mark.unit
    def test_frozen(self):
        """Test payloads cannot be reassigned."""
        message = PlainMessage(header=HEADER, text=b"x")
        with pytest.raises(ValidationError):
            message.text = b"y"

    @pytest.mark.unit
    def test_invalid_utf8_string_form(self):
        """Test pass-through bytes do not break str()."""
        assert str(PlainMessage(header=HEADER, text=b"caf\xe9")) == "caf\ufffd"


class TestStructuredMessage:
    """Tests for StructuredMessage."""

    @pytest.mark.unit
    def test_absent_vs_empty(self):
        """Test None (absent) is distinct from b'' (empty part)."""
        empty_text = StructuredMessage(header=HEADER, text=b"")
        assert empty_text.has_text()
        assert not empty_text.has_html()

        nothing = StructuredMessage(header=HEADER)
        assert not nothing.has_text()
        assert str(nothing) == ""

    @pytest.mark.unit
    def test_string_form_is_text(self):
        """Test str() returns the text part, not the HTML."""
        message = StructuredMessage(header=HEADER, text=b"plain", html=b"<p>html</p>")
        assert str(message) == "plain"


class TestDecodedMessageUnion:
    """Tests for the discriminated union."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data,expected",
        [
            ({"kind": "plain", "header": {"fields": []}, "text": b"x"}, PlainMessage),
            ({"kind": "structured", "header": {"fields": []}, "html": b"<p/>"}, StructuredMessage),
        ],
    )
    def test_discriminator(self, data, expected):
        """Test `kind` selects the variant."""
        assert isinstance(TypeAdapter(DecodedMessage).validate_python(data), expected)

    @pytest.mark.unit
    def test_unknown_kind(self):
        """Test an unknown discriminator is rejected."""
        with pytest.raises(ValidationError):
            TypeAdapter(DecodedMessage).validate_python({"kind": "other", "header": {}})


class TestMediaType:
    """Tests for MediaType accessors."""

    @pytest.mark.unit
    def test_accessors(self):
        """Test maintype/subtype/param helpers."""
        mt = MediaType(mediatype="multipart/related", params={"boundary": "b", "type": "text/html"})
        assert mt.maintype == "multipart"
        assert mt.subtype == "related"
        assert mt.is_multipart()
        assert not mt.is_text()
        assert mt.boundary == "b"
        assert mt.param("TYPE") == "text/html"
        assert mt.charset is None
