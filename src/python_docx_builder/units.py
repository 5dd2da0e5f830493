"""
Unit constants and conversions used by the object model.

OOXML measures most lengths in twips (1/1440 inch), drawing extents in EMUs
(1/914400 inch) and font sizes in half-points. The object model stores these
native units directly so the serializer never converts; the helpers here are
for callers who think in inches, points or pixels.
"""

TWIPS_PER_INCH = 1440
TWIPS_PER_POINT = 20
EMU_PER_INCH = 914400
EMU_PER_CM = 360000
EMU_PER_PIXEL = 9525  # At 96 DPI
PIXELS_PER_INCH = 96
HALF_POINTS_PER_POINT = 2


def inches_to_twips(inches: float) -> int:
    """Convert inches to twips."""
    return int(round(inches * TWIPS_PER_INCH))


def points_to_twips(points: float) -> int:
    """Convert points to twips."""
    return int(round(points * TWIPS_PER_POINT))


def twips_to_inches(twips: int) -> float:
    """Convert twips to inches."""
    return twips / TWIPS_PER_INCH


def twips_to_points(twips: int) -> float:
    """Convert twips to points."""
    return twips / TWIPS_PER_POINT


def points_to_half_points(points: float) -> int:
    """Convert a font size in points to OOXML half-points.

    Example:
        >>> points_to_half_points(16)
        32
    """
    return int(round(points * HALF_POINTS_PER_POINT))


def half_points_to_points(half_points: int) -> float:
    """Convert OOXML half-points to points."""
    return half_points / HALF_POINTS_PER_POINT


def pixels_to_emu(pixels: int) -> int:
    """Convert pixels (at 96 DPI) to EMUs."""
    return pixels * EMU_PER_PIXEL


def emu_to_pixels(emu: int) -> int:
    """Convert EMUs to whole pixels (at 96 DPI)."""
    return emu // EMU_PER_PIXEL


def inches_to_emu(inches: float) -> int:
    """Convert inches to EMUs."""
    return int(inches * EMU_PER_INCH)


def cm_to_emu(cm: float) -> int:
    """Convert centimeters to EMUs."""
    return int(cm * EMU_PER_CM)
