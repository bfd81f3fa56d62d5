"""Tests for raster decoding and encoding."""
import os
import stat

import numpy as np
import pytest

from bleedfix.raster_io import load_raster, save_raster, raster_from_array
from bleedfix.types import Raster, FormatError, EncodeError
from conftest import garbage_sprite, write_png16


class TestLoadRaster:
    """Test decoding."""

    def test_load_rgba(self, write_png):
        """RGBA PNGs load with transparent RGB intact."""
        pixels = garbage_sprite()
        path = write_png("sprite.png", pixels)

        raster = load_raster(path)

        assert raster.width == 24 and raster.height == 24
        assert raster.format == "PNG"
        assert np.array_equal(raster.pixels, pixels)

    def test_reject_rgb(self, write_png):
        """Other color layouts are a format error."""
        path = write_png("rgb.png", garbage_sprite(), mode="RGB")

        with pytest.raises(FormatError, match="Expected RGBA"):
            load_raster(path)

    def test_convert_rgb(self, write_png):
        """With conversion enabled RGB images become opaque RGBA."""
        path = write_png("rgb.png", garbage_sprite(), mode="RGB")

        raster = load_raster(path, convert=True)

        assert raster.pixels.shape == (24, 24, 4)
        assert np.all(raster.alpha == 255)

    def test_unreadable_file(self, tmp_path):
        """Garbage bytes are a format error."""
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")

        with pytest.raises(FormatError):
            load_raster(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FormatError):
            load_raster(tmp_path / "missing.png")

    def test_reject_16_bit(self, tmp_path):
        """Wider channels are rejected instead of narrowed to 8 bits."""
        path = write_png16(tmp_path / "deep.png")

        with pytest.raises(FormatError, match="color depth"):
            load_raster(path)

    def test_convert_16_bit(self, tmp_path):
        """With conversion enabled 16-bit images load as 8-bit RGBA."""
        path = write_png16(tmp_path / "deep.png")

        raster = load_raster(path, convert=True)

        assert raster.pixels.shape == (4, 4, 4)
        assert raster.pixels[0, 0, 3] == 255


class TestSaveRaster:
    """Test encoding."""

    def test_save_in_place(self, write_png):
        """Saved pixels read back unchanged."""
        path = write_png("sprite.png", garbage_sprite())
        raster = load_raster(path)
        raster.pixels[..., :3] = 42

        save_raster(raster)

        assert np.all(load_raster(path).pixels[..., :3] == 42)
        assert [p.name for p in path.parent.iterdir()] == ["sprite.png"]

    def test_save_keeps_permissions(self, write_png):
        """The replaced file keeps the permission bits of the original."""
        path = write_png("sprite.png", garbage_sprite())
        os.chmod(path, 0o644)

        save_raster(load_raster(path))

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o644

    def test_failed_encode_keeps_original(self, write_png):
        """An encode error leaves the file on disk untouched."""
        path = write_png("sprite.png", garbage_sprite())
        original = path.read_bytes()
        raster = load_raster(path)
        raster.format = "NOT-A-FORMAT"

        with pytest.raises(EncodeError):
            save_raster(raster)

        assert path.read_bytes() == original
        assert [p.name for p in path.parent.iterdir()] == ["sprite.png"]


class TestRasterContract:
    """Test raster validation."""

    def test_wrong_channel_count(self):
        with pytest.raises(FormatError):
            Raster(pixels=np.zeros((2, 2, 3), dtype=np.uint8))

    def test_wrong_dtype(self):
        with pytest.raises(FormatError):
            Raster(pixels=np.zeros((2, 2, 4), dtype=np.uint16))

    def test_empty(self):
        with pytest.raises(FormatError):
            Raster(pixels=np.zeros((0, 2, 4), dtype=np.uint8))

    def test_from_empty_float_array(self):
        with pytest.raises(FormatError):
            raster_from_array(np.zeros((0, 3, 4), dtype=np.float32))

    def test_from_float_array(self):
        raster = raster_from_array(np.ones((2, 3, 4), dtype=np.float32))

        assert raster.width == 3 and raster.height == 2
        assert np.all(raster.pixels == 255)
