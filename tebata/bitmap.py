"""Reading palette BMP textures and copying 24-bit BMP images."""

from __future__ import annotations

import struct
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import BinaryIO, List, Optional, Sequence, Tuple

FILE_HEADER_SIZE = 14
MAX_PIXELS = 2000 * 2000

_INFO_HEADER = struct.Struct("<IiiHHIIiiII")
_PALETTE_SIZES = {8: 256, 4: 16}

Rgb = Tuple[int, int, int]


class BitmapError(ValueError):
    """Raised for a bitmap that cannot be read or written."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise BitmapError(f"unexpected end of file: wanted {size} bytes, got {len(data)}")
    return data


def read_rgba(path) -> Tuple[int, int, bytes]:
    """Read an 8- or 4-bit palette BMP as ``(width, height, rgba_bytes)``.

    Rows stay in file order; every pixel gets alpha 255.
    """
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise BitmapError(f"cannot open {path}") from exc
    with stream:
        _read_exact(stream, FILE_HEADER_SIZE)
        fields = _INFO_HEADER.unpack(_read_exact(stream, _INFO_HEADER.size))
        width, height, bit_count = fields[1], fields[2], fields[4]
        if bit_count not in _PALETTE_SIZES:
            raise BitmapError(f"unsupported bit count: {bit_count}")
        if width < 0 or height < 0:
            raise BitmapError(f"bad image size: {width} x {height}")
        raw_palette = _read_exact(stream, 4 * _PALETTE_SIZES[bit_count])
        palette = [(r, g, b) for b, g, r, _ in struct.iter_unpack("4B", raw_palette)]
        count = width * height
        if bit_count == 8:
            indices = list(_read_exact(stream, count))
        else:
            packed = _read_exact(stream, (count + 1) // 2)
            indices = [n for byte in packed for n in (byte >> 4, byte & 0x0F)][:count]
    pixels = bytearray()
    for index in indices:
        pixels += bytes((*palette[index], 255))
    return width, height, bytes(pixels)


@dataclass
class TrueColorImage:
    """Uncompressed 24-bit image, pixels as (r, g, b) rows in file order."""

    width: int
    height: int
    pixels: List[Rgb]
    data_offset: int = FILE_HEADER_SIZE + 40
    header_size: int = 40
    prefix: bytes = b"BM" + bytes(8)
    planes: bytes = b"\x01\x00"
    trailer: bytes = field(default=bytes(20))

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height:
            raise BitmapError(
                f"{len(self.pixels)} pixels for a {self.width} x {self.height} image"
            )


def _row_padding(width: int) -> int:
    return (3 * width) % 4


def read_truecolor(stream: BinaryIO) -> TrueColorImage:
    """Read an uncompressed 24-bit BMP from a binary stream."""
    prefix = _read_exact(stream, 10)
    data_offset, header_size = struct.unpack("<II", _read_exact(stream, 8))
    if data_offset != FILE_HEADER_SIZE + header_size:
        raise BitmapError("header size error")
    width, height = struct.unpack("<II", _read_exact(stream, 8))
    if width * height > MAX_PIXELS:
        raise BitmapError(f"image too big: {width} x {height}")
    planes = _read_exact(stream, 2)
    (color,) = struct.unpack("<H", _read_exact(stream, 2))
    if color != 24:
        raise BitmapError(f"not 24-bit color: {color}")
    (compression,) = struct.unpack("<I", _read_exact(stream, 4))
    if compression != 0:
        raise BitmapError(f"compressed image: {compression}")
    trailer = _read_exact(stream, 20)
    padding = _row_padding(width)
    pixels: List[Rgb] = []
    for _ in range(height):
        row = _read_exact(stream, 3 * width)
        pixels.extend((r, g, b) for b, g, r in struct.iter_unpack("3B", row))
        _read_exact(stream, padding)
    return TrueColorImage(
        width, height, pixels, data_offset, header_size, prefix, planes, trailer
    )


def write_truecolor(image: TrueColorImage, stream: BinaryIO) -> None:
    """Write ``image`` as an uncompressed 24-bit BMP to a binary stream."""
    if len(image.prefix) != 10 or len(image.planes) != 2 or len(image.trailer) != 20:
        raise BitmapError("malformed header fields")
    stream.write(image.prefix)
    stream.write(struct.pack("<II", image.data_offset, image.header_size))
    stream.write(struct.pack("<II", image.width, image.height))
    stream.write(image.planes)
    stream.write(struct.pack("<HI", 24, 0))
    stream.write(image.trailer)
    pad = bytes(_row_padding(image.width))
    for start in range(0, len(image.pixels), max(image.width, 1)):
        row = image.pixels[start:start + image.width]
        stream.write(b"".join(bytes((b, g, r)) for r, g, b in row))
        stream.write(pad)


def copy_truecolor(source, destination) -> TrueColorImage:
    """Copy the 24-bit BMP at ``source`` to ``destination`` pixel by pixel."""
    with open(source, "rb") as infile:
        image = read_truecolor(infile)
    copied = replace(image, pixels=list(image.pixels))
    with open(destination, "wb") as outfile:
        write_truecolor(copied, outfile)
    return copied


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Copy one 24-bit BMP file to another: ``<original> <filename>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print(" Usage: b <original> <filename>", file=sys.stderr)
        return 1
    source, destination = args[0], args[1]
    if not Path(source).is_file():
        print(f" File open error : {source}", file=sys.stderr)
        return 1
    try:
        image = copy_truecolor(source, destination)
    except OSError as exc:
        print(f" File open error : {exc.filename}", file=sys.stderr)
        return 1
    except BitmapError as exc:
        print(f" {exc}", file=sys.stderr)
        return 1
    print(f" Width, Height = {image.width} {image.height}", file=sys.stderr)
    return 0