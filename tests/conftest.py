import struct
import zlib

import numpy as np
import pytest
from PIL import Image


def make_sprite(width, height, box=None, color=(200, 40, 40, 255)):
    """
    RGBA image of the given size, transparent everywhere except the
    (left, top, right, bottom) box, which is filled with color.
    The whole image is filled when box is None.
    """
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    if box is None:
        box = (0, 0, width, height)
    left, top, right, bottom = box
    pixels[top:bottom, left:right] = color
    return Image.fromarray(pixels)


@pytest.fixture
def sprite_factory():
    return make_sprite


@pytest.fixture
def sprite_dir(tmp_path):
    input_dir = tmp_path / "sprites"
    input_dir.mkdir()
    return input_dir


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "normalized"


def _png_chunk(kind, payload):
    crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)


def oversized_png_bytes(width=20000, height=20000):
    """PNG with only a header and an end marker, claiming a huge RGBA size."""
    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + _png_chunk(b"IHDR", header) + _png_chunk(b"IEND", b"")


@pytest.fixture
def oversized_png(tmp_path):
    path = tmp_path / "huge.png"
    path.write_bytes(oversized_png_bytes())
    return path
