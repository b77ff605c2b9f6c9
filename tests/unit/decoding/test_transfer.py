"""
Unit tests for transfer-encoding decoding (transfer.py).
"""

import pytest

from eml_decoder.config import Settings
from eml_decoder.decoding.transfer import (
    decode_part_body,
    normalize_transfer_encoding,
    strip_transfer_encoding,
)
from eml_decoder.errors import DecodeError, UnsupportedTransferEncodingError
from tests.fixtures.emails import JAPANESE_TEXT, SHIFT_JIS_JAPANESE


class TestNormalizeTransferEncoding:
    """Tests for normalize_transfer_encoding() function."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "7bit"),
            ("", "7bit"),
            ("BASE64", "base64"),
            (" Quoted-Printable ", "quoted-printable"),
            ("8bit; foo=bar", "8bit"),
        ],
    )
    def test_normalize(self, value, expected):
        """Test header values are lowercased and stripped of parameters."""
        assert normalize_transfer_encoding(value) == expected


class TestStripTransferEncoding:
    """Tests for strip_transfer_encoding() function."""

    @pytest.mark.unit
    def test_base64(self):
        """Test standard base64 decoding."""
        assert strip_transfer_encoding(b"SGVsbG8=", "base64") == b"Hello"

    @pytest.mark.unit
    def test_base64_ignores_line_breaks(self):
        """Test wrapped base64 bodies."""
        assert strip_transfer_encoding(b"SGVs\r\nbG8g\r\nV29y\nbGQ=\n", "base64") == b"Hello World"

    @pytest.mark.unit
    @pytest.mark.parametrize("body", [b"SGVsbG8", b"SGVs!bG8="])
    def test_base64_malformed(self, body):
        """Test malformed base64 raises DecodeError."""
        with pytest.raises(DecodeError) as exc_info:
            strip_transfer_encoding(body, "base64")
        assert exc_info.value.encoding == "base64"

    @pytest.mark.unit
    def test_quoted_printable(self):
        """Test quoted-printable escapes and soft line breaks."""
        assert strip_transfer_encoding(b"caf=E9 =\nau lait", "quoted-printable") == b"caf\xe9 au lait"

    @pytest.mark.unit
    @pytest.mark.parametrize("encoding", ["7bit", "8bit", "binary"])
    def test_identity_encodings(self, encoding):
        """Test identity transfer encodings leave bytes untouched."""
        assert strip_transfer_encoding(b"raw \xff bytes", encoding) == b"raw \xff bytes"

    @pytest.mark.unit
    def test_unsupported(self):
        """Test unknown transfer encodings are rejected."""
        with pytest.raises(UnsupportedTransferEncodingError) as exc_info:
            strip_transfer_encoding(b"begin 644 x", "x-uuencode")
        assert exc_info.value.encoding == "x-uuencode"
        assert str(exc_info.value) == "Unsupported Content Transfer Encoding: x-uuencode"


class TestDecodePartBody:
    """Tests for decode_part_body() function."""

    @pytest.mark.unit
    def test_base64_decoded_before_transcoding(self):
        """Test base64 is stripped before the charset is applied."""
        import base64

        body = base64.b64encode(SHIFT_JIS_JAPANESE)
        assert decode_part_body(body, "base64", "Shift_JIS").decode("utf-8") == JAPANESE_TEXT

    @pytest.mark.unit
    def test_quoted_printable_transcoded(self):
        """Test quoted-printable bodies are transcoded like base64 ones."""
        result = decode_part_body(b"=93=FA=96=7B=8C=EA", "quoted-printable", "shift_jis")
        assert result.decode("utf-8") == JAPANESE_TEXT

    @pytest.mark.unit
    def test_quoted_printable_legacy_passthrough(self):
        """Test legacy mode returns quoted-printable bodies raw."""
        settings = Settings(_env_file=None, transcode_quoted_printable=False)
        body = b"=93=FA=96=7B=8C=EA"
        assert decode_part_body(body, "quoted-printable", "shift_jis", settings=settings) == body

    @pytest.mark.unit
    def test_absent_transfer_encoding(self):
        """Test a missing header is treated as 7bit."""
        assert decode_part_body(b"plain", None, None) == b"plain"

    @pytest.mark.unit
    def test_unsupported_transfer_encoding(self):
        """Test unsupported encodings fail before transcoding."""
        with pytest.raises(UnsupportedTransferEncodingError):
            decode_part_body(b"data", "x-gzip", "utf-8")
