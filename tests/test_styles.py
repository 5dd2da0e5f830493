"""Tests for StyleRegistry, the built-in catalog and style XML."""

import pytest

from python_docx_builder.constants import w
from python_docx_builder.errors import NotFoundError, ValidationError
from python_docx_builder.models.formatting import RED, Alignment
from python_docx_builder.models.style import RunFormatting, Style, StyleType
from python_docx_builder.style_templates import built_in_style_ids, get_heading_style
from python_docx_builder.styles import StyleRegistry, style_from_element, style_to_element


def _custom(style_id: str, based_on: str | None = "Normal", **kwargs) -> Style:
    return Style(
        style_id=style_id,
        name=style_id,
        style_type=StyleType.PARAGRAPH,
        based_on=based_on,
        **kwargs,
    )


@pytest.fixture
def registry() -> StyleRegistry:
    return StyleRegistry()


class TestBuiltInCatalog:
    """Test the styles every registry starts with."""

    def test_catalog_is_seeded(self, registry: StyleRegistry) -> None:
        """Test that headings, Normal and the hyperlink style are present."""
        for style_id in ("Normal", "Heading1", "Heading9", "Title", "Hyperlink", "TableGrid"):
            assert style_id in registry
            assert registry.is_built_in(style_id)
        assert len(registry) == len(built_in_style_ids())

    def test_defaults_per_type(self, registry: StyleRegistry) -> None:
        """Test that Normal is the default paragraph style."""
        assert registry.default_style(StyleType.PARAGRAPH) == "Normal"

    def test_heading_style_levels(self) -> None:
        """Test heading formatting by level."""
        heading = get_heading_style(2)
        assert heading.based_on == "Normal"
        assert heading.paragraph_formatting.outline_level == 2
        assert heading.run_formatting.size == 26
        with pytest.raises(ValueError):
            get_heading_style(10)

    def test_built_in_styles_are_copies(self, registry: StyleRegistry) -> None:
        """Test that editing a fetched built-in style leaves the registry unchanged."""
        normal = registry.get_style("Normal")
        normal.set_bold(True)
        assert registry.get_style("Normal").run_formatting.bold is None


class TestAddStyle:
    """Test registering custom styles."""

    def test_add_and_get(self, registry: StyleRegistry) -> None:
        """Test that a custom style can be fetched back."""
        style = _custom("Callout")
        registry.add_style(style)
        assert registry.get_style("Callout") is style
        assert not registry.is_built_in("Callout")
        assert registry.list_styles()[-1] == "Callout"

    def test_duplicate_id_rejected(self, registry: StyleRegistry) -> None:
        """Test that a style ID can be registered once."""
        registry.add_style(_custom("Callout"))
        with pytest.raises(ValidationError):
            registry.add_style(_custom("Callout"))

    def test_built_in_id_rejected(self, registry: StyleRegistry) -> None:
        """Test that built-in styles cannot be replaced."""
        with pytest.raises(ValidationError):
            registry.add_style(_custom("Heading1"))

    def test_empty_id_rejected(self, registry: StyleRegistry) -> None:
        """Test that a style needs an ID."""
        with pytest.raises(ValidationError):
            registry.add_style(_custom("  "))

    def test_built_in_flag_rejected(self, registry: StyleRegistry) -> None:
        """Test that user styles cannot claim to be built-in."""
        with pytest.raises(ValidationError):
            registry.add_style(_custom("Mine", built_in=True))

    def test_self_reference_rejected(self, registry: StyleRegistry) -> None:
        """Test that a style cannot be based on itself."""
        with pytest.raises(ValidationError):
            registry.add_style(_custom("Loop", based_on="Loop"))

    def test_default_style_moves(self, registry: StyleRegistry) -> None:
        """Test that a custom default replaces the previous default."""
        registry.add_style(_custom("Body", is_default=True))
        assert registry.default_style(StyleType.PARAGRAPH) == "Body"


class TestInheritance:
    """Test basedOn chains."""

    def test_inheritance_chain(self, registry: StyleRegistry) -> None:
        """Test that the chain runs from the style to its root."""
        registry.add_style(_custom("Base"))
        registry.add_style(_custom("Derived", based_on="Base"))
        assert registry.inheritance_chain("Derived") == ["Derived", "Base", "Normal"]

    def test_chain_of_unknown_style(self, registry: StyleRegistry) -> None:
        """Test that an unknown style raises NotFoundError."""
        with pytest.raises(NotFoundError):
            registry.inheritance_chain("Nope")

    def test_set_based_on_rejects_cycle(self, registry: StyleRegistry) -> None:
        """Test that re-parenting cannot close a loop."""
        registry.add_style(_custom("A"))
        registry.add_style(_custom("B", based_on="A"))
        with pytest.raises(ValidationError):
            registry.set_based_on("A", "B")
        assert registry.get_style("A").based_on == "Normal"

    def test_set_based_on_detach(self, registry: StyleRegistry) -> None:
        """Test that None removes the parent."""
        registry.add_style(_custom("A"))
        registry.set_based_on("A", None)
        assert registry.get_style("A").based_on is None

    def test_set_based_on_built_in_rejected(self, registry: StyleRegistry) -> None:
        """Test that built-in styles keep their parents."""
        with pytest.raises(ValidationError):
            registry.set_based_on("Heading1", None)

    def test_resolve_run_formatting(self, registry: StyleRegistry) -> None:
        """Test that the nearest style wins when merging formatting."""
        registry.add_style(_custom("Base", run_formatting=RunFormatting(bold=True, size=30)))
        registry.add_style(_custom("Derived", based_on="Base", run_formatting=RunFormatting(size=40)))
        resolved = registry.resolve_run_formatting("Derived")
        assert resolved.bold is True
        assert resolved.size == 40


class TestRemoveAndDefaults:
    """Test removal and default changes."""

    def test_remove_restores_catalog_default(self, registry: StyleRegistry) -> None:
        """Test that removing a custom default brings Normal back."""
        registry.add_style(_custom("Body", is_default=True))
        registry.remove_style("Body")
        assert "Body" not in registry
        assert registry.default_style(StyleType.PARAGRAPH) == "Normal"

    def test_remove_built_in_rejected(self, registry: StyleRegistry) -> None:
        """Test that built-in styles cannot be removed."""
        with pytest.raises(ValidationError):
            registry.remove_style("Normal")

    def test_remove_unknown(self, registry: StyleRegistry) -> None:
        """Test that removing an unknown style raises NotFoundError."""
        with pytest.raises(NotFoundError):
            registry.remove_style("Nope")

    def test_set_default_type_mismatch(self, registry: StyleRegistry) -> None:
        """Test that a character style cannot be the paragraph default."""
        with pytest.raises(ValidationError):
            registry.set_default_style(StyleType.PARAGRAPH, "Strong")


class TestStyleSetters:
    """Test validation on Style setters."""

    def test_size_bounds(self) -> None:
        """Test that sizes outside [2, 3276] are rejected."""
        style = _custom("Sized")
        style.set_size(2)
        style.set_size(3276)
        with pytest.raises(ValidationError):
            style.set_size(3277)

    def test_paragraph_setters_on_character_style(self) -> None:
        """Test that character styles carry no paragraph formatting."""
        style = Style(style_id="Char", name="Char", style_type=StyleType.CHARACTER)
        with pytest.raises(ValidationError):
            style.set_alignment(Alignment.CENTER)


class TestStyleXml:
    """Test styles.xml generation and parsing."""

    def test_registry_element(self, registry: StyleRegistry) -> None:
        """Test docDefaults and the default flag on Normal."""
        root = registry.to_element()
        assert root.tag == w("styles")
        assert root[0].tag == w("docDefaults")
        normal = next(s for s in root.iter(w("style")) if s.get(w("styleId")) == "Normal")
        assert normal.get(w("default")) == "1"

    def test_style_round_trip(self) -> None:
        """Test that a custom style survives conversion to XML and back."""
        style = _custom("Callout", run_formatting=RunFormatting(bold=True, color=RED, size=28))
        style.set_alignment(Alignment.CENTER)
        style.set_spacing_after(120)
        style.set_outline_level(3)

        parsed = style_from_element(style_to_element(style))
        assert parsed is not None
        assert parsed.style_id == "Callout"
        assert parsed.based_on == "Normal"
        assert parsed.run_formatting.bold is True
        assert parsed.run_formatting.color == RED
        assert parsed.run_formatting.size == 28
        assert parsed.paragraph_formatting.alignment is Alignment.CENTER
        assert parsed.paragraph_formatting.spacing_after == 120
        assert parsed.paragraph_formatting.outline_level == 3

    def test_bold_false_written_explicitly(self) -> None:
        """Test that an explicit False toggle is written as val=0."""
        style = _custom("Plain", run_formatting=RunFormatting(bold=False))
        rpr = style_to_element(style).find(w("rPr"))
        assert rpr.find(w("b")).get(w("val")) == "0"
