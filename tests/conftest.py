"""Shared fixtures: documents and in-memory images generated with Pillow."""

import io
from collections.abc import Callable

import pytest
from PIL import Image as PILImage

from python_docx_builder import Document
from python_docx_builder.ids import IDGenerator
from python_docx_builder.media import MediaStore
from python_docx_builder.models.context import PartContext
from python_docx_builder.relationships import RelationshipTable


def _encode(width: int, height: int, fmt: str) -> bytes:
    buffer = io.BytesIO()
    PILImage.new("RGB", (width, height), (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory returning encoded image bytes of a given size and format."""

    def factory(width: int = 40, height: int = 20, fmt: str = "PNG") -> bytes:
        return _encode(width, height, fmt)

    return factory


@pytest.fixture
def png_bytes() -> bytes:
    """A 40x20 pixel PNG."""
    return _encode(40, 20, "PNG")


@pytest.fixture
def doc() -> Document:
    return Document()


@pytest.fixture
def context() -> PartContext:
    """Bookkeeping for building entities outside a Document."""
    ids = IDGenerator()
    return PartContext(ids, RelationshipTable(ids), MediaStore(ids))
