"""Reading and writing of Truevision TGA images held in memory."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike
from typing import Union

_HEADER = struct.Struct("<BBBHHBHHHHBB")
_DEVELOPER_AREA_REF = bytes(4)
_EXTENSION_AREA_REF = bytes(4)
_FOOTER = b"TRUEVISION-XFILE.\x00"
_MAX_CHUNK_LENGTH = 128

_Path = Union[str, "PathLike[str]"]


class TGAError(Exception):
    """Raised when a TGA image cannot be read or written."""


class TGAFormat(IntEnum):
    """Bytes per pixel of the supported image layouts."""

    GRAYSCALE = 1
    RGB = 3
    RGBA = 4


@dataclass(frozen=True)
class TGAColor:
    """A colour in blue, green, red, alpha order."""

    b: int = 0
    g: int = 0
    r: int = 0
    a: int = 0
    bytespp: int = 4

    def __post_init__(self) -> None:
        for channel in (self.b, self.g, self.r, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    @property
    def bgra(self) -> tuple[int, int, int, int]:
        return (self.b, self.g, self.r, self.a)

    def __getitem__(self, index: int) -> int:
        return self.bgra[index]


class TGAImage:
    """A pixel buffer of ``width * height`` pixels of ``bpp`` bytes each."""

    GRAYSCALE = TGAFormat.GRAYSCALE
    RGB = TGAFormat.RGB
    RGBA = TGAFormat.RGBA

    def __init__(self, width: int = 0, height: int = 0, bpp: int = 0) -> None:
        if width < 0 or height < 0 or bpp < 0:
            raise ValueError("image dimensions must not be negative")
        self._w = int(width)
        self._h = int(height)
        self._bpp = int(bpp)
        self._data = bytearray(self._w * self._h * self._bpp)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def bpp(self) -> int:
        return self._bpp

    @property
    def pixels(self) -> bytes:
        """The raw pixel bytes, row after row from the top."""
        return bytes(self._data)

    # ------------------------------------------------------------------ access

    def _in_bounds(self, x: int, y: int) -> bool:
        return bool(self._data) and 0 <= x < self._w and 0 <= y < self._h

    def get(self, x: int, y: int) -> TGAColor:
        """Return the colour at (x, y), or a blank colour outside the image."""
        if not self._in_bounds(x, y):
            return TGAColor()
        start = (x + y * self._w) * self._bpp
        channels = list(self._data[start:start + self._bpp]) + [0] * (4 - self._bpp)
        return TGAColor(*channels[:4], bytespp=self._bpp)

    def set(self, x: int, y: int, color: TGAColor) -> None:
        """Store ``color`` at (x, y); points outside the image are ignored."""
        if not self._in_bounds(x, y):
            return
        start = (x + y * self._w) * self._bpp
        self._data[start:start + self._bpp] = bytes(color.bgra[: self._bpp])

    # ------------------------------------------------------------------- flips

    def _rows(self) -> list[bytes]:
        stride = self._w * self._bpp
        return [bytes(self._data[row * stride:(row + 1) * stride]) for row in range(self._h)]

    def flip_horizontally(self) -> None:
        """Mirror the image left to right."""
        bpp = self._bpp
        flipped = bytearray()
        for row in self._rows():
            pixels = [row[i:i + bpp] for i in range(0, len(row), bpp)] if bpp else []
            flipped.extend(b"".join(reversed(pixels)))
        if bpp:
            self._data = flipped

    def flip_vertically(self) -> None:
        """Mirror the image top to bottom."""
        self._data = bytearray(b"".join(reversed(self._rows())))

    # ---------------------------------------------------------------- decoding

    @classmethod
    def decode(cls, data: bytes) -> TGAImage:
        """Build an image from the bytes of a TGA file."""
        if len(data) < _HEADER.size:
            raise TGAError("an error occured while reading the header")
        (
            _idlength,
            _colormaptype,
            datatypecode,
            _colormaporigin,
            _colormaplength,
            _colormapdepth,
            _x_origin,
            _y_origin,
            width,
            height,
            bitsperpixel,
            imagedescriptor,
        ) = _HEADER.unpack_from(data, 0)
        bpp = bitsperpixel >> 3
        if width <= 0 or height <= 0 or bpp not in set(TGAFormat):
            raise TGAError("bad bpp (or width/height) value")

        image = cls(width, height, bpp)
        body = memoryview(data)[_HEADER.size:]
        nbytes = width * height * bpp
        if datatypecode in (2, 3):
            if len(body) < nbytes:
                raise TGAError("an error occured while reading the data")
            image._data = bytearray(body[:nbytes])
        elif datatypecode in (10, 11):
            image._data = _decode_rle(body, width * height, bpp)
        else:
            raise TGAError(f"unknown file format {datatypecode}")

        if not imagedescriptor & 0x20:
            image.flip_vertically()
        if imagedescriptor & 0x10:
            image.flip_horizontally()
        return image

    @classmethod
    def read_tga_file(cls, filename: _Path) -> TGAImage:
        """Load an image from a TGA file on disk."""
        try:
            with open(filename, "rb") as stream:
                content = stream.read()
        except OSError as exc:
            raise TGAError(f"can't open file {filename}") from exc
        return cls.decode(content)

    # ---------------------------------------------------------------- encoding

    def encode(self, vflip: bool = True, rle: bool = True) -> bytes:
        """Return the bytes of a TGA file holding this image."""
        if self._bpp == TGAFormat.GRAYSCALE:
            datatypecode = 11 if rle else 3
        else:
            datatypecode = 10 if rle else 2
        header = _HEADER.pack(
            0, 0, datatypecode, 0, 0, 0, 0, 0,
            self._w & 0xFFFF,
            self._h & 0xFFFF,
            (self._bpp << 3) & 0xFF,
            0x00 if vflip else 0x20,
        )
        body = self._encode_rle() if rle else bytes(self._data)
        return header + body + _DEVELOPER_AREA_REF + _EXTENSION_AREA_REF + _FOOTER

    def write_tga_file(self, filename: _Path, vflip: bool = True, rle: bool = True) -> None:
        """Write the image to ``filename`` as a TGA file."""
        content = self.encode(vflip, rle)
        try:
            with open(filename, "wb") as stream:
                stream.write(content)
        except OSError as exc:
            raise TGAError("can't dump the tga file") from exc

    def _encode_rle(self) -> bytes:
        bpp = self._bpp
        data = self._data
        npixels = self._w * self._h
        out = bytearray()
        curpix = 0
        while curpix < npixels:
            chunkstart = curpix * bpp
            curbyte = chunkstart
            run_length = 1
            raw = True
            while curpix + run_length < npixels and run_length < _MAX_CHUNK_LENGTH:
                succ_eq = data[curbyte:curbyte + bpp] == data[curbyte + bpp:curbyte + 2 * bpp]
                curbyte += bpp
                if run_length == 1:
                    raw = not succ_eq
                if raw and succ_eq:
                    run_length -= 1
                    break
                if not raw and not succ_eq:
                    break
                run_length += 1
            curpix += run_length
            out.append(run_length - 1 if raw else run_length + 127)
            out.extend(data[chunkstart:chunkstart + (run_length * bpp if raw else bpp)])
        return bytes(out)


def _decode_rle(body: memoryview, pixelcount: int, bpp: int) -> bytearray:
    out = bytearray()
    pos = 0
    currentpixel = 0
    while currentpixel < pixelcount:
        if pos >= len(body):
            raise TGAError("an error occured while reading the data")
        chunkheader = body[pos]
        pos += 1
        if chunkheader < 128:
            count = chunkheader + 1
            if currentpixel + count > pixelcount:
                raise TGAError("Too many pixels read")
            size = count * bpp
            if pos + size > len(body):
                raise TGAError("an error occured while reading the header")
            out.extend(body[pos:pos + size])
            pos += size
        else:
            count = chunkheader - 127
            if pos + bpp > len(body):
                raise TGAError("an error occured while reading the header")
            if currentpixel + count > pixelcount:
                raise TGAError("Too many pixels read")
            out.extend(bytes(body[pos:pos + bpp]) * count)
            pos += bpp
        currentpixel += count
    return out