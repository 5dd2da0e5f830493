"""Tests for ContentTypeManifest."""

from python_docx_builder.constants import CONTENT_TYPES_NAMESPACE
from python_docx_builder.content_types import (
    ContentTypeManifest,
    ContentTypes,
    content_type_for_extension,
)


class TestContentTypeManifest:
    """Test [Content_Types].xml entries."""

    def test_add_default_normalizes_extension(self) -> None:
        """Test that extensions are stored lower-case without the dot."""
        manifest = ContentTypeManifest()
        assert manifest.add_default(".PNG", ContentTypes.PNG)
        assert manifest.defaults == {"png": ContentTypes.PNG}

    def test_duplicate_default_is_ignored(self) -> None:
        """Test that the first declaration of an extension wins."""
        manifest = ContentTypeManifest()
        manifest.add_default("png", ContentTypes.PNG)
        assert not manifest.add_default("png", ContentTypes.OCTET_STREAM)
        assert manifest.defaults["png"] == ContentTypes.PNG

    def test_add_override_adds_leading_slash(self) -> None:
        """Test that part names are made absolute."""
        manifest = ContentTypeManifest()
        assert manifest.add_override("word/document.xml", ContentTypes.DOCUMENT)
        assert "/word/document.xml" in manifest.overrides
        assert not manifest.add_override("/word/document.xml", ContentTypes.DOCUMENT)

    def test_empty_arguments_are_rejected(self) -> None:
        """Test that empty extensions or types add nothing."""
        manifest = ContentTypeManifest()
        assert not manifest.add_default("", ContentTypes.PNG)
        assert not manifest.add_override("word/a.xml", "")

    def test_get_content_type_prefers_override(self) -> None:
        """Test resolution order: override, then extension default."""
        manifest = ContentTypeManifest()
        manifest.add_default("xml", ContentTypes.XML)
        manifest.add_override("word/styles.xml", ContentTypes.STYLES)
        assert manifest.get_content_type("word/styles.xml") == ContentTypes.STYLES
        assert manifest.get_content_type("word/other.xml") == ContentTypes.XML
        assert manifest.get_content_type("word/media/a.png") is None

    def test_to_element(self) -> None:
        """Test that defaults precede overrides in the XML."""
        manifest = ContentTypeManifest()
        manifest.add_default("rels", ContentTypes.RELATIONSHIPS)
        manifest.add_override("word/document.xml", ContentTypes.DOCUMENT)
        root = manifest.to_element()

        tags = [child.tag for child in root]
        assert tags == [
            f"{{{CONTENT_TYPES_NAMESPACE}}}Default",
            f"{{{CONTENT_TYPES_NAMESPACE}}}Override",
        ]
        assert root[1].get("PartName") == "/word/document.xml"


class TestContentTypeForExtension:
    """Test content_type_for_extension()."""

    def test_known_extensions(self) -> None:
        """Test image extensions in any case."""
        assert content_type_for_extension(".JPG") == "image/jpeg"
        assert content_type_for_extension("svg") == "image/svg+xml"

    def test_unknown_extension(self) -> None:
        """Test the octet-stream fallback."""
        assert content_type_for_extension("xyz") == "application/octet-stream"
