"""Core enumerations, flags and parameter errors shared by encoder and decoder."""

from __future__ import annotations

import sys
from enum import Enum, IntEnum, IntFlag
from typing import Optional

__all__ = [
    "ColorType",
    "BitDepth",
    "BytesPerPixel",
    "Unit",
    "DisposeOp",
    "BlendOp",
    "Compression",
    "Transformations",
    "ParameterError",
    "ImageBufferSizeError",
    "PolledAfterEndOfImageError",
]

_U32_MAX = 0xFFFF_FFFF


def _check_width(width: int) -> None:
    if not 0 <= width <= _U32_MAX:
        raise ValueError(f"width must fit in 32 unsigned bits, got {width}")


class BitDepth(IntEnum):
    """Number of bits per sample."""

    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8
    SIXTEEN = 16


class ColorType(IntEnum):
    """How a pixel is encoded."""

    GRAYSCALE = 0
    RGB = 2
    INDEXED = 3
    GRAYSCALE_ALPHA = 4
    RGBA = 6

    def samples(self) -> int:
        """Number of samples per pixel."""
        return _SAMPLES[self]

    def checked_raw_row_length(self, depth: BitDepth, width: int) -> Optional[int]:
        """Bytes of one raw row including the filter byte, or None if it exceeds the address space."""
        _check_width(width)
        bits = width * self.samples() * int(depth)
        length = 1 + (bits + 7) // 8
        return length if length <= sys.maxsize else None

    def raw_row_length_from_width(self, depth: BitDepth, width: int) -> int:
        """Bytes of one raw row of ``width`` pixels, including the filter byte."""
        _check_width(width)
        samples = width * self.samples()
        depth = BitDepth(depth)
        if depth is BitDepth.SIXTEEN:
            return 1 + samples * 2
        if depth is BitDepth.EIGHT:
            return 1 + samples
        samples_per_byte = 8 // int(depth)
        whole, rest = divmod(samples, samples_per_byte)
        return 1 + whole + (1 if rest else 0)

    def is_combination_invalid(self, bit_depth: BitDepth) -> bool:
        """True if the PNG standard forbids this colour type with ``bit_depth``."""
        bit_depth = BitDepth(bit_depth)
        subbyte = bit_depth in (BitDepth.ONE, BitDepth.TWO, BitDepth.FOUR)
        if subbyte and self in (ColorType.RGB, ColorType.GRAYSCALE_ALPHA, ColorType.RGBA):
            return True
        return bit_depth is BitDepth.SIXTEEN and self is ColorType.INDEXED


_SAMPLES = {
    ColorType.GRAYSCALE: 1,
    ColorType.INDEXED: 1,
    ColorType.RGB: 3,
    ColorType.GRAYSCALE_ALPHA: 2,
    ColorType.RGBA: 4,
}


class BytesPerPixel(IntEnum):
    """Byte-rounded pixel width as used by the filter prediction."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    SIX = 6
    EIGHT = 8


class Unit(IntEnum):
    """Physical unit of the pixel dimensions."""

    UNSPECIFIED = 0
    METER = 1


class DisposeOp(IntEnum):
    """How an APNG frame area is reset at the end of a frame."""

    NONE = 0
    BACKGROUND = 1
    PREVIOUS = 2

    def __str__(self) -> str:
        return f"DISPOSE_OP_{self.name}"


class BlendOp(IntEnum):
    """How frame pixels are written into the output buffer."""

    SOURCE = 0
    OVER = 1

    def __str__(self) -> str:
        return f"BLEND_OP_{self.name}"


class Compression(Enum):
    """The type and strength of applied compression."""

    DEFAULT = "default"
    FAST = "fast"
    BEST = "best"
    HUFFMAN = "huffman"
    RLE = "rle"


class Transformations(IntFlag):
    """Output transformations applied while decoding."""

    IDENTITY = 0x00000
    STRIP_16 = 0x00001
    EXPAND = 0x00010
    ALPHA = 0x10000

    @classmethod
    def normalize_to_color8(cls) -> "Transformations":
        """Transform every input to 8-bit grayscale or colour."""
        return cls.EXPAND | cls.STRIP_16


class ParameterError(ValueError):
    """A caller supplied an argument that does not fit the image."""


class ImageBufferSizeError(ParameterError):
    """The provided buffer does not have the size needed for the image data."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"wrong data size, expected {expected} got {actual}")


class PolledAfterEndOfImageError(ParameterError):
    """A further image was requested after the last one."""

    def __init__(self) -> None:
        super().__init__("End of image has been reached")