"""Reading Truevision TGA textures (uncompressed and run-length encoded)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

_HEADER = struct.Struct("<BBBhhBhhhhBB")

GRAYSCALE = 1
RGB = 3
RGBA = 4
_SUPPORTED_BYTESPP = (GRAYSCALE, RGB, RGBA)

_UNCOMPRESSED_TYPES = (2, 3)
_RLE_TYPES = (10, 11)
_TOP_ORIGIN_FLAG = 0x20


class TGAError(Exception):
    """Raised when a TGA file cannot be read; ``code`` tells what went wrong."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class TGAHeader:
    """The fixed 18-byte header at the start of a TGA file."""

    id_length: int
    colormap_type: int
    datatype_code: int
    colormap_origin: int
    colormap_length: int
    colormap_depth: int
    x_origin: int
    y_origin: int
    width: int
    height: int
    bits_per_pixel: int
    image_descriptor: int

    @classmethod
    def from_bytes(cls, data: bytes) -> TGAHeader:
        """Decode a header from the first 18 bytes of ``data``."""
        if len(data) < _HEADER.size:
            raise TGAError(2, "can't read the header")
        return cls(*_HEADER.unpack_from(data))


@dataclass
class TGAImage:
    """Decoded pixel data, one row after another, ``bytespp`` bytes per pixel."""

    width: int
    height: int
    bytespp: int
    datatype_code: int
    data: bytearray

    @property
    def stride(self) -> int:
        return self.width * self.bytespp

    def flip_vertically(self) -> None:
        """Reverse the order of the rows in place."""
        stride = self.stride
        rows = [self.data[start:start + stride] for start in range(0, len(self.data), stride)]
        self.data[:] = b"".join(reversed(rows))

    def flip_horizontally(self) -> None:
        """Reverse the order of the pixels in every row in place."""
        stride, size = self.stride, self.bytespp
        flipped = bytearray()
        for start in range(0, len(self.data), stride):
            row = self.data[start:start + stride]
            pixels = [row[i:i + size] for i in range(0, stride, size)]
            flipped += b"".join(reversed(pixels))
        self.data[:] = flipped

    def flip_color(self) -> None:
        """Reorder colour channels from the file's byte order."""
        data = self.data
        if self.bytespp == RGB:
            data[0::3], data[2::3] = data[2::3], data[0::3]
        elif self.bytespp == RGBA:
            first, second, third = data[0::4], data[1::4], data[2::4]
            data[0::4] = third
            data[2::4] = second
            data[3::4] = first

    def describe(self) -> str:
        """One-line summary: size, bits per pixel and data type."""
        return (
            f"tga info:\t{self.width}x{self.height}/"
            f"{self.bytespp * 8}/{self.datatype_code}"
        )


def _decode_rle(stream: BinaryIO, pixel_count: int, bytespp: int) -> bytearray:
    pixels = bytearray()
    count = 0
    while count < pixel_count:
        head = stream.read(1)
        if not head:
            raise TGAError(5, "can't read chunk header")
        chunk_header = head[0]
        if chunk_header < 128:
            run = chunk_header + 1
            count += run
            if count > pixel_count:
                raise TGAError(5, "too many pixels read")
            chunk = stream.read(run * bytespp)
            if len(chunk) < run * bytespp:
                raise TGAError(5, "can't read pixel data")
            pixels += chunk
        else:
            run = chunk_header - 127
            pixel = stream.read(bytespp)
            if len(pixel) < bytespp:
                raise TGAError(5, "can't read pixel data")
            if count + run > pixel_count:
                raise TGAError(5, "too many pixels read")
            count += run
            pixels += pixel * run
    return pixels


def read_tga(stream: BinaryIO) -> TGAImage:
    """Decode a TGA image from a binary stream."""
    header = TGAHeader.from_bytes(stream.read(_HEADER.size))
    width, height = header.width, header.height
    bytespp = header.bits_per_pixel >> 3
    if width <= 0 or height <= 0 or bytespp not in _SUPPORTED_BYTESPP:
        raise TGAError(3, "bad width, height or bits per pixel value")

    nbytes = width * height * bytespp
    if header.datatype_code in _UNCOMPRESSED_TYPES:
        raw = stream.read(nbytes)
        if len(raw) < nbytes:
            raise TGAError(
                4, f"an error occurred while reading datatype {header.datatype_code}"
            )
        pixels = bytearray(raw)
    elif header.datatype_code in _RLE_TYPES:
        pixels = _decode_rle(stream, width * height, bytespp)
    else:
        raise TGAError(6, f"unknown file format: {header.datatype_code}")

    image = TGAImage(width, height, bytespp, header.datatype_code, pixels)
    image.flip_color()
    if header.image_descriptor & _TOP_ORIGIN_FLAG:
        image.flip_vertically()
    return image


def load_tga(path) -> TGAImage:
    """Read a TGA image from a file path."""
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise TGAError(1, f"can't open file: {path}") from exc
    with handle:
        return read_tga(handle)