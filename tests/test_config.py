"""
Unit tests for configuration parsing.
"""

import logging
from pathlib import Path

import pytest

from floatwm.config import LayoutConfig, configure_logging, parse_color
from floatwm.geometry import ViewportBounds


@pytest.mark.unit
class TestParseColor:
    """Test hex and tuple colour parsing."""

    def test_rgb_hex(self):
        assert parse_color("#4c4c4c") == (0x4C, 0x4C, 0x4C, 0xFF)

    def test_rgba_hex(self):
        assert parse_color("#10203040") == (0x10, 0x20, 0x30, 0x40)

    def test_without_hash(self):
        assert parse_color("ffffff") == (255, 255, 255, 255)

    def test_tuple_passthrough(self):
        assert parse_color((1, 2, 3, 4)) == (1, 2, 3, 4)

    @pytest.mark.parametrize("bad", ["#fff", "#12345", [1, 2, 3, 4], (1, 2, 3)])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            parse_color(bad)


@pytest.mark.unit
class TestLayoutConfig:
    """Test LayoutConfig defaults and derived values."""

    def test_colors_parsed(self):
        config = LayoutConfig(header_color="#000000")

        assert config.header_color == (0, 0, 0, 255)
        assert len(config.background_color) == 4

    def test_viewport_has_bands(self):
        viewport = LayoutConfig().viewport(1200, 800)

        assert viewport == ViewportBounds(1200, 800, reserved_top=80, reserved_bottom=40)
        assert viewport.usable_height == 680

    def test_reference_design(self):
        design = LayoutConfig(reference_width=1600, reference_height=900).reference_design

        assert (design.width, design.height) == (1600, 900)

    def test_state_path_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FLOATWM_STATE", str(tmp_path / "layout.json"))

        assert LayoutConfig().state_path == Path(tmp_path / "layout.json")

    def test_configure_logging(self):
        configure_logging("debug")
        logger = logging.getLogger("floatwm")

        try:
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 1
        finally:
            logger.handlers[:] = []
            logger.setLevel(logging.NOTSET)
