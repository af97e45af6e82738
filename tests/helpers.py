"""Shared fixtures for the test suite."""

import random
import struct
import zlib
from io import BytesIO

from PIL import Image


def png_bytes(width: int, height: int, color="red") -> bytes:
    """Create a solid-colour PNG image in memory."""
    buffer = BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, "PNG")
    return buffer.getvalue()


def scryfall_record(name, layout="normal", png=None, faces=None):
    """Build a minimal Scryfall card object."""
    record = {"object": "card", "name": name, "layout": layout}
    if png is not None:
        record["image_uris"] = {"png": png, "large": png.replace(".png", ".jpg")}
    if faces is not None:
        record["card_faces"] = [
            {"name": face_name, "image_uris": {"png": face_png}}
            for face_name, face_png in faces
        ]
    return record


def _chunk(kind: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)


def png_with_broken_chunk(width: int, height: int) -> bytes:
    """Create an RGB PNG whose pixel data is split over two IDAT chunks,
    with the header of the second chunk mangled.

    The file opens fine; reading the pixels fails partway through.
    """
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    # Noise keeps the compressed stream long, so half of it cannot hold every row
    rng = random.Random(0)
    raw = b"".join(
        b"\x00" + bytes(rng.getrandbits(8) for _ in range(width * 3)) for _ in range(height)
    )
    compressed = zlib.compress(raw)
    half = len(compressed) // 2
    second = bytearray(_chunk(b"IDAT", compressed[half:]))
    second[4:8] = b"\x8a\x8a\x8a\x8a"
    return (
        b"\x89PNG\r\n\x1a\n"
        + _chunk(b"IHDR", header)
        + _chunk(b"IDAT", compressed[:half])
        + bytes(second)
        + _chunk(b"IEND", b"")
    )
