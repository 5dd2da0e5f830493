"""
Image model classes.

An Image holds the raw bytes of a picture together with its pixel/EMU size
and its placement in the text flow. Pixel dimensions are read with Pillow;
formats Pillow cannot measure (SVG, some TIFF and WebP variants) are still
accepted as opaque payloads.

The relationship ID and in-package target are filled in by
Paragraph.add_image once the bytes are registered with the document's media
store and relationship table.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from python_docx_builder.constants import DEFAULT_IMAGE_SIZE_PX
from python_docx_builder.errors import DocxIOError, UnsupportedError, ValidationError
from python_docx_builder.units import EMU_PER_INCH, EMU_PER_PIXEL, PIXELS_PER_INCH

logger = logging.getLogger(__name__)


class ImageFormat(Enum):
    """Supported image formats, valued by file extension."""

    PNG = "png"
    JPEG = "jpeg"
    JPG = "jpg"
    GIF = "gif"
    BMP = "bmp"
    TIFF = "tiff"
    TIF = "tif"
    SVG = "svg"
    WEBP = "webp"

    @classmethod
    def from_filename(cls, filename: str) -> ImageFormat:
        """Determine the format from a file name's extension.

        Raises:
            UnsupportedError: If the extension is not a supported format
        """
        ext = Path(filename).suffix.lower().lstrip(".")
        try:
            return cls(ext)
        except ValueError:
            raise UnsupportedError("ImageFormat.from_filename", f"image format {ext!r}") from None

    @property
    def requires_dimensions(self) -> bool:
        """Whether the pixel size must be decodable for this format."""
        return self in _MEASURED_FORMATS


_MEASURED_FORMATS = frozenset(
    {ImageFormat.PNG, ImageFormat.JPEG, ImageFormat.JPG, ImageFormat.GIF, ImageFormat.BMP}
)


class ImagePositionType(Enum):
    INLINE = "inline"
    FLOATING = "floating"


class HorizontalAlign(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    INSIDE = "inside"
    OUTSIDE = "outside"


class VerticalAlign(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"
    INSIDE = "inside"
    OUTSIDE = "outside"


class TextWrapType(Enum):
    """How body text flows around a floating image."""

    NONE = "none"
    SQUARE = "square"
    TIGHT = "tight"
    THROUGH = "through"
    TOP_BOTTOM = "topBottom"
    BEHIND_TEXT = "behindText"
    IN_FRONT_OF_TEXT = "inFrontText"


@dataclass(frozen=True)
class ImageSize:
    """Image dimensions in pixels and EMUs.

    Attributes:
        width_px: Width in pixels
        height_px: Height in pixels
        width_emu: Width in EMUs (914400 per inch)
        height_emu: Height in EMUs
    """

    width_px: int = 0
    height_px: int = 0
    width_emu: int = 0
    height_emu: int = 0

    @property
    def is_zero(self) -> bool:
        return self.width_emu == 0 and self.height_emu == 0


def new_image_size(width_px: int, height_px: int) -> ImageSize:
    """Size from pixels at 96 DPI (9525 EMU per pixel).

    Example:
        >>> new_image_size(100, 50).width_emu
        952500
    """
    return ImageSize(width_px, height_px, width_px * EMU_PER_PIXEL, height_px * EMU_PER_PIXEL)


def new_image_size_inches(width_in: float, height_in: float) -> ImageSize:
    """Size from inches; pixel values assume 96 DPI.

    Example:
        >>> new_image_size_inches(1, 1)
        ImageSize(width_px=96, height_px=96, width_emu=914400, height_emu=914400)
    """
    return ImageSize(
        int(width_in * PIXELS_PER_INCH),
        int(height_in * PIXELS_PER_INCH),
        int(width_in * EMU_PER_INCH),
        int(height_in * EMU_PER_INCH),
    )


@dataclass(frozen=True)
class ImagePosition:
    """Placement of an image.

    Inline images sit in the text like a character; floating images are
    anchored to the paragraph and positioned by alignment or by EMU offsets
    (a non-zero offset wins over the alignment).
    """

    type: ImagePositionType = ImagePositionType.INLINE
    h_align: HorizontalAlign = HorizontalAlign.LEFT
    v_align: VerticalAlign = VerticalAlign.TOP
    offset_x: int = 0
    offset_y: int = 0
    wrap_text: TextWrapType = TextWrapType.NONE
    z_order: int = 0
    behind_text: bool = False

    @property
    def is_floating(self) -> bool:
        return self.type is ImagePositionType.FLOATING


def default_image_position() -> ImagePosition:
    return ImagePosition()


def floating_position(
    h_align: HorizontalAlign = HorizontalAlign.LEFT,
    v_align: VerticalAlign = VerticalAlign.TOP,
    wrap_text: TextWrapType = TextWrapType.SQUARE,
    **kwargs,
) -> ImagePosition:
    """Shorthand for a floating ImagePosition."""
    return ImagePosition(
        type=ImagePositionType.FLOATING,
        h_align=h_align,
        v_align=v_align,
        wrap_text=wrap_text,
        **kwargs,
    )


def read_image_file(path: str | Path) -> bytes:
    """Read all bytes of an image file.

    Raises:
        DocxIOError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise DocxIOError("read_image_file", f"cannot read {path}: {e}") from e


def decode_dimensions(data: bytes, image_format: ImageFormat) -> tuple[int, int]:
    """Return the pixel (width, height) of an image payload.

    Measured formats (PNG, JPEG, GIF, BMP) must decode. Other formats fall
    back to (0, 0) when Pillow cannot read them.

    Raises:
        ValidationError: If a measured format cannot be decoded
    """
    try:
        with PILImage.open(io.BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError, ValueError) as e:
        if image_format.requires_dimensions:
            raise ValidationError(
                "decode_dimensions", "data", f"<{len(data)} bytes>", f"cannot decode {image_format.value} image: {e}"
            ) from e
        logger.debug(f"No pixel size for {image_format.value} payload: {e}")
        return 0, 0


class Image:
    """A picture embedded in a run.

    Attributes:
        id: Image ID from the document's generator (e.g., "img1")
        format: The image format
        data: The raw bytes
        original_size: Size decoded from the bytes (zero if unknown)
        description: Alt text
        relationship_id: rId of the image relationship, once registered
        target: Target path relative to word/ (e.g., "media/image1.png")
    """

    def __init__(
        self,
        image_id: str,
        data: bytes,
        image_format: ImageFormat,
        original_size: ImageSize | None = None,
        size: ImageSize | None = None,
        position: ImagePosition | None = None,
        description: str = "",
    ) -> None:
        if not data:
            raise ValidationError("Image", "data", b"", "image data cannot be empty")
        self.id = image_id
        self.format = image_format
        self.data = bytes(data)
        self.original_size = original_size or ImageSize()
        if size is None:
            size = self.original_size
            if size.is_zero:
                size = new_image_size(DEFAULT_IMAGE_SIZE_PX, DEFAULT_IMAGE_SIZE_PX)
        self._size = size
        self._position = position or default_image_position()
        self.description = description
        self.relationship_id = ""
        self.target = ""

    def __repr__(self) -> str:
        return f"<Image id={self.id!r} format={self.format.value} size={self._size.width_px}x{self._size.height_px}>"

    @property
    def size(self) -> ImageSize:
        return self._size

    @property
    def position(self) -> ImagePosition:
        return self._position

    def set_size(self, size: ImageSize) -> None:
        """Set the display size.

        A zero width or height is derived from the other dimension using the
        aspect ratio of the original size.

        Raises:
            ValidationError: If both dimensions are zero, any is negative,
                or one is zero and the original aspect ratio is unknown
        """
        op = "Image.set_size"
        if min(size.width_px, size.height_px, size.width_emu, size.height_emu) < 0:
            raise ValidationError(op, "size", size, "dimensions cannot be negative")
        if size.width_emu == 0 and size.height_emu == 0:
            raise ValidationError(op, "size", size, "width and height cannot both be zero")

        if size.width_emu == 0 or size.height_emu == 0:
            orig = self.original_size
            if orig.width_emu == 0 or orig.height_emu == 0:
                raise ValidationError(op, "size", size, "original size unknown; give both dimensions")
            if size.width_emu == 0:
                ratio = orig.width_emu / orig.height_emu
                size = replace(
                    size,
                    width_emu=int(size.height_emu * ratio),
                    width_px=int(size.height_px * ratio),
                )
            else:
                ratio = orig.height_emu / orig.width_emu
                size = replace(
                    size,
                    height_emu=int(size.width_emu * ratio),
                    height_px=int(size.width_px * ratio),
                )

        self._size = size

    def set_description(self, description: str) -> None:
        self.description = description

    def set_position(self, position: ImagePosition) -> None:
        if position.z_order < 0:
            raise ValidationError("Image.set_position", "z_order", position.z_order, "must be non-negative")
        self._position = position

    def attach(self, relationship_id: str, target: str) -> None:
        """Record where the image bytes were registered."""
        self.relationship_id = relationship_id
        self.target = target


def new_image(
    image_id: str,
    data: bytes,
    filename: str,
    size: ImageSize | None = None,
    position: ImagePosition | None = None,
) -> Image:
    """Create an Image from a payload, measuring it with Pillow.

    Args:
        image_id: ID to assign
        data: Raw bytes
        filename: Name whose extension determines the format
        size: Display size; the decoded size (or a 96x96 px placeholder)
            if omitted
        position: Placement; inline if omitted

    Raises:
        UnsupportedError: If the extension is not a supported image format
        ValidationError: If the data is empty, cannot be measured when it
            must be, or the size or position is invalid
    """
    if not data:
        raise ValidationError("new_image", "data", b"", "image data cannot be empty")
    image_format = ImageFormat.from_filename(filename)
    width, height = decode_dimensions(data, image_format)
    image = Image(image_id, data, image_format, original_size=new_image_size(width, height))
    if size is not None:
        image.set_size(size)
    if position is not None:
        image.set_position(position)
    return image
