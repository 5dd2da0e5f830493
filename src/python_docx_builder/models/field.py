"""
Field model for dynamic document content.

A field is a directive Word evaluates when it lays the document out: page
numbers, a table of contents, the current date. The library only knows a
field's code and a cached result; ``update()`` fills the result with a
placeholder that Word replaces on the next field refresh.

Example:
    >>> field = new_toc_field(levels="1-2")
    >>> field.code
    'TOC \\\\o "1-2" \\\\h \\\\z \\\\u'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from python_docx_builder.errors import ValidationError
from python_docx_builder.validation import check_xml_text


class FieldType(Enum):
    """Field kinds, valued by the keyword that starts their field code."""

    TOC = "TOC"
    PAGE_NUMBER = "PAGE"
    PAGE_COUNT = "NUMPAGES"
    DATE = "DATE"
    TIME = "TIME"
    STYLE_REF = "STYLEREF"
    SEQ = "SEQ"
    REF = "REF"
    HYPERLINK = "HYPERLINK"
    CUSTOM = "CUSTOM"

    @classmethod
    def from_code(cls, code: str) -> FieldType:
        """Classify a field code by its first keyword.

        Codes whose keyword is not one of the known kinds are CUSTOM.
        """
        keyword = code.strip().split(" ", 1)[0].upper() if code.strip() else ""
        for member in cls:
            if member is not cls.CUSTOM and member.value == keyword:
                return member
        return cls.CUSTOM


DEFAULT_TOC_LEVELS = "1-3"

_DEFAULT_CODES = {
    FieldType.PAGE_NUMBER: "PAGE",
    FieldType.PAGE_COUNT: "NUMPAGES",
    FieldType.TOC: f'TOC \\o "{DEFAULT_TOC_LEVELS}" \\h \\z \\u',
    FieldType.DATE: "DATE",
    FieldType.TIME: "TIME",
    FieldType.STYLE_REF: 'STYLEREF "Heading 1"',
    FieldType.SEQ: "SEQ Figure",
}

# Results shown until Word recalculates the field
_PLACEHOLDERS = {
    FieldType.PAGE_NUMBER: "1",
    FieldType.PAGE_COUNT: "1",
    FieldType.TOC: "Table of Contents",
    FieldType.STYLE_REF: "",
    FieldType.DATE: "1/1/2025",
    FieldType.TIME: "12:00 PM",
    FieldType.SEQ: "1",
}


@dataclass
class Field:
    """A complex field (w:fldChar begin/separate/end).

    Attributes:
        field_type: Kind of field
        code: The field instruction (e.g., 'PAGE', 'TOC \\o "1-3"')
        result: Cached result shown until Word updates the field
        dirty: Ask Word to recalculate the field when the file is opened
        properties: Extra named values used to build the code or result
            (e.g., "url" and "display" for hyperlinks)
    """

    field_type: FieldType
    code: str = ""
    result: str = ""
    dirty: bool = True
    properties: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.code:
            self.code = _DEFAULT_CODES.get(self.field_type, "")
        check_xml_text("Field", "code", self.code)
        check_xml_text("Field", "result", self.result)

    def set_code(self, code: str) -> None:
        """Replace the field code and mark the field dirty.

        Raises:
            ValidationError: If the code is blank or contains characters XML forbids
        """
        if not code or not code.strip():
            raise ValidationError("Field.set_code", "code", code, "field code cannot be empty")
        check_xml_text("Field.set_code", "code", code)
        self.code = code
        self.dirty = True

    def set_property(self, key: str, value: str) -> None:
        self.properties[key] = value
        self.dirty = True

    def get_property(self, key: str) -> str | None:
        return self.properties.get(key)

    def placeholder_result(self) -> str:
        """The result ``update()`` would store, without changing the field."""
        if self.field_type is FieldType.HYPERLINK:
            return self.properties.get("display", self.result)
        return _PLACEHOLDERS.get(self.field_type, "")

    def display_result(self) -> str:
        """The text to write as the cached result."""
        return self.result if self.result else self.placeholder_result()

    def update(self) -> None:
        """Recompute the cached result if the field is dirty.

        True values (page numbers, TOC entries) depend on layout, so the
        result is a placeholder.
        """
        if not self.dirty:
            return
        self.result = self.placeholder_result()
        self.dirty = False

    def mark_dirty(self) -> None:
        self.dirty = True

    def copy(self) -> Field:
        return Field(self.field_type, self.code, self.result, self.dirty, dict(self.properties))


# =============================================================================
# Factories
# =============================================================================


def new_field(field_type: FieldType) -> Field:
    """Create a field of ``field_type`` with its default code."""
    return Field(field_type)


def new_page_number_field() -> Field:
    return Field(FieldType.PAGE_NUMBER)


def new_page_count_field() -> Field:
    return Field(FieldType.PAGE_COUNT)


def new_toc_field(
    levels: str = DEFAULT_TOC_LEVELS,
    hyperlinks: bool = True,
    hide_page_numbers: bool = False,
    hide_tab_leader: bool = False,
) -> Field:
    """Create a table of contents field.

    Args:
        levels: Heading levels to include, e.g. "1-3"
        hyperlinks: Make entries hyperlinks to their headings (\\h)
        hide_page_numbers: Omit page numbers (\\n)
        hide_tab_leader: Omit the tab leader before page numbers (\\p)

    Returns:
        A dirty TOC field; Word builds the entries when it updates fields
    """
    if not levels or not levels.strip():
        raise ValidationError("new_toc_field", "levels", levels, "levels cannot be empty")

    code = f'TOC \\o "{levels}"'
    if hyperlinks:
        code += " \\h"
    if hide_page_numbers:
        code += " \\n"
    if hide_tab_leader:
        code += " \\p"
    # Hide tab leader and page numbers in web view; use outline levels
    code += " \\z \\u"

    return Field(FieldType.TOC, code=code, properties={"levels": levels})


def new_date_field(format: str = "") -> Field:
    """Create a DATE field, optionally with a date picture (e.g. "M/d/yyyy")."""
    code = f'DATE \\@ "{format}"' if format else "DATE"
    return Field(FieldType.DATE, code=code)


def new_time_field(format: str = "") -> Field:
    code = f'TIME \\@ "{format}"' if format else "TIME"
    return Field(FieldType.TIME, code=code)


def new_style_ref_field(style_name: str) -> Field:
    """Create a STYLEREF field showing the nearest text in ``style_name``."""
    if not style_name:
        raise ValidationError("new_style_ref_field", "style_name", style_name, "style name cannot be empty")
    return Field(FieldType.STYLE_REF, code=f'STYLEREF "{style_name}"', properties={"style": style_name})


def new_seq_field(identifier: str = "Figure", format: str = "") -> Field:
    """Create a SEQ field numbering items such as figures or tables."""
    if not identifier:
        raise ValidationError("new_seq_field", "identifier", identifier, "identifier cannot be empty")
    code = f"SEQ {identifier}"
    if format:
        code += f" \\* {format}"
    return Field(FieldType.SEQ, code=code, properties={"identifier": identifier})


def new_ref_field(bookmark_name: str, hyperlink: bool = True) -> Field:
    """Create a REF field showing the text of a bookmark."""
    if not bookmark_name:
        raise ValidationError("new_ref_field", "bookmark_name", bookmark_name, "bookmark name cannot be empty")
    code = f"REF {bookmark_name}"
    if hyperlink:
        code += " \\h"
    return Field(FieldType.REF, code=code, properties={"bookmark": bookmark_name})


def new_hyperlink_field(url: str, display_text: str) -> Field:
    """Create a HYPERLINK field; it is clean since its result is known."""
    if not url:
        raise ValidationError("new_hyperlink_field", "url", url, "url cannot be empty")
    return Field(
        FieldType.HYPERLINK,
        code=f'HYPERLINK "{url}"',
        result=display_text,
        dirty=False,
        properties={"url": url, "display": display_text},
    )


def new_custom_field(code: str, result: str = "") -> Field:
    """Create a field from an arbitrary instruction."""
    custom = Field(FieldType.CUSTOM, result=result)
    custom.set_code(code)
    return custom
