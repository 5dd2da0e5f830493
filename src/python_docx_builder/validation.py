"""
Input checks shared by the model setters.

XML 1.0 cannot carry most C0 control characters, lone surrogates or the
U+FFFE/U+FFFF noncharacters, so text bound for a part is rejected when it
is set rather than when the package is written.
"""

from __future__ import annotations

import re

from .errors import ValidationError

# Tab, LF and CR are the only control characters XML 1.0 allows
_XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def find_xml_illegal(text: str) -> str | None:
    """Return the first character XML cannot represent, or None."""
    match = _XML_ILLEGAL_RE.search(text)
    return match.group() if match else None


def check_xml_text(op: str, field: str, text: str) -> None:
    """Raise if ``text`` cannot be written into an XML part.

    Raises:
        ValidationError: If text contains a character XML 1.0 forbids
    """
    bad = find_xml_illegal(text)
    if bad is not None:
        raise ValidationError(op, field, text, f"{field} contains U+{ord(bad):04X}, which XML cannot represent")
