"""Pytest configuration and fixtures."""

import struct
import zlib

import numpy as np
import pytest
from PIL import Image

from bleedfix.types import Raster

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def make_raster(width, height, fill=(0, 0, 0, 0), path=""):
    """Raster filled with one RGBA value."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[...] = fill
    return Raster(pixels=pixels, path=path)


def garbage_sprite(size=24, seed=0):
    """Opaque disc on a transparent background whose RGB is random garbage."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(size, size, 4), dtype=np.uint8)
    yy, xx = np.mgrid[:size, :size]
    inside = (xx - size / 2) ** 2 + (yy - size / 2) ** 2 < (size / 3) ** 2
    pixels[..., 3] = np.where(inside, 255, 0)
    return pixels


def write_png16(path, width=4, height=4):
    """Write a 16-bit-per-channel RGBA PNG with one opaque pixel."""
    def chunk(tag, data):
        body = tag + data
        return struct.pack(">I", len(data)) + body + struct.pack(">I", zlib.crc32(body) & 0xFFFFFFFF)

    rows = []
    for y in range(height):
        row = b"\x00"
        for x in range(width):
            if (x, y) == (0, 0):
                row += struct.pack(">4H", 65535, 0, 0, 65535)
            else:
                row += struct.pack(">4H", 1234, 5678, 9012, 0)
        rows.append(row)

    header = struct.pack(">IIBBBBB", width, height, 16, 6, 0, 0, 0)
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(b"".join(rows)))
        + chunk(b"IEND", b"")
    )
    return path


@pytest.fixture
def write_png(tmp_path):
    """Write an RGBA (or other mode) array as a PNG under tmp_path."""
    def _write(name, pixels, mode=None):
        path = tmp_path / name
        image = Image.fromarray(np.asarray(pixels, dtype=np.uint8))
        if mode is not None:
            image = image.convert(mode)
        image.save(path, format="PNG")
        return path
    return _write
