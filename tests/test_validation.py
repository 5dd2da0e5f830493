"""Tests for the XML text checks."""

import pytest

from python_docx_builder.errors import ValidationError
from python_docx_builder.validation import check_xml_text, find_xml_illegal


class TestXmlText:
    """Test which characters can be written to a part."""

    @pytest.mark.parametrize("text", ["plain", "tab\tnew\nline\rreturn", "café €", "emoji 😀", ""])
    def test_allowed(self, text: str) -> None:
        """Test that ordinary text, tab, LF and CR pass."""
        assert find_xml_illegal(text) is None
        check_xml_text("op", "text", text)

    @pytest.mark.parametrize("bad", ["\x00", "\x08", "\x0b", "\x0c", "\x1f", "\ufffe", "\uffff"])
    def test_rejected(self, bad: str) -> None:
        """Test that control characters and noncharacters are reported."""
        assert find_xml_illegal(f"a{bad}b") == bad
        with pytest.raises(ValidationError) as exc_info:
            check_xml_text("Run.set_text", "text", f"a{bad}b")
        assert exc_info.value.op == "Run.set_text"
        assert exc_info.value.field == "text"
        assert f"U+{ord(bad):04X}" in str(exc_info.value)
