"""Tests for unit conversions."""

from python_docx_builder.units import (
    cm_to_emu,
    emu_to_pixels,
    half_points_to_points,
    inches_to_emu,
    inches_to_twips,
    pixels_to_emu,
    points_to_half_points,
    points_to_twips,
    twips_to_inches,
    twips_to_points,
)


class TestLengthConversions:
    """Test twip and point conversions."""

    def test_inches_to_twips(self) -> None:
        """Test that one inch is 1440 twips."""
        assert inches_to_twips(1) == 1440
        assert inches_to_twips(0.5) == 720

    def test_points_to_twips(self) -> None:
        """Test that one point is 20 twips."""
        assert points_to_twips(12) == 240

    def test_twips_back_to_inches_and_points(self) -> None:
        """Test the reverse conversions."""
        assert twips_to_inches(2880) == 2.0
        assert twips_to_points(240) == 12.0

    def test_font_sizes_in_half_points(self) -> None:
        """Test that 16pt is written as 32 half-points."""
        assert points_to_half_points(16) == 32
        assert half_points_to_points(22) == 11.0


class TestEmuConversions:
    """Test EMU conversions used by drawings."""

    def test_pixels_to_emu_at_96_dpi(self) -> None:
        """Test that a pixel is 9525 EMUs."""
        assert pixels_to_emu(1) == 9525
        assert pixels_to_emu(96) == 914400

    def test_emu_to_pixels_truncates(self) -> None:
        """Test that partial pixels are dropped."""
        assert emu_to_pixels(914400) == 96
        assert emu_to_pixels(9524) == 0

    def test_inches_and_cm_to_emu(self) -> None:
        """Test the inch and centimeter factors."""
        assert inches_to_emu(1) == 914400
        assert cm_to_emu(1) == 360000
        assert cm_to_emu(0.5) == 180000
