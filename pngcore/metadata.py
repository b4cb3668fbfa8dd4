"""Image metadata: frame and animation control, gamma, chromaticities and the Info record."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple

from .types import BitDepth, BytesPerPixel, ColorType, Compression, DisposeOp, BlendOp, Unit

__all__ = [
    "PixelDimensions",
    "FrameControl",
    "AnimationControl",
    "ScaledFloat",
    "SourceChromaticities",
    "SrgbRenderingIntent",
    "Info",
]

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF


def _check_range(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} must be between 0 and {maximum}, got {value}")


def _f32(value: float) -> float:
    """Round a float to the nearest single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass
class PixelDimensions:
    """Physical pixel dimensions from a pHYs chunk."""

    xppu: int
    yppu: int
    unit: Unit = Unit.UNSPECIFIED

    def to_bytes(self) -> bytes:
        """The pHYs chunk payload."""
        _check_range("xppu", self.xppu, _U32_MAX)
        _check_range("yppu", self.yppu, _U32_MAX)
        return struct.pack(">IIB", self.xppu, self.yppu, int(self.unit))


@dataclass
class FrameControl:
    """Frame control information of an animated PNG frame."""

    sequence_number: int = 0
    width: int = 0
    height: int = 0
    x_offset: int = 0
    y_offset: int = 0
    delay_num: int = 1
    delay_den: int = 30
    dispose_op: DisposeOp = DisposeOp.NONE
    blend_op: BlendOp = BlendOp.SOURCE

    def inc_seq_num(self, i: int) -> None:
        """Advance the sequence number by ``i``."""
        new = self.sequence_number + i
        if not 0 <= new <= _U32_MAX:
            raise OverflowError(f"sequence number out of range: {new}")
        self.sequence_number = new

    def to_bytes(self) -> bytes:
        """The 26-byte fcTL chunk payload."""
        for name in ("sequence_number", "width", "height", "x_offset", "y_offset"):
            _check_range(name, getattr(self, name), _U32_MAX)
        _check_range("delay_num", self.delay_num, _U16_MAX)
        _check_range("delay_den", self.delay_den, _U16_MAX)
        return struct.pack(
            ">IIIIIHHBB",
            self.sequence_number,
            self.width,
            self.height,
            self.x_offset,
            self.y_offset,
            self.delay_num,
            self.delay_den,
            int(DisposeOp(self.dispose_op)),
            int(BlendOp(self.blend_op)),
        )


@dataclass
class AnimationControl:
    """Animation control information of an animated PNG."""

    num_frames: int
    num_plays: int = 0

    def to_bytes(self) -> bytes:
        """The 8-byte acTL chunk payload."""
        _check_range("num_frames", self.num_frames, _U32_MAX)
        _check_range("num_plays", self.num_plays, _U32_MAX)
        return struct.pack(">II", self.num_frames, self.num_plays)


@dataclass(frozen=True)
class ScaledFloat:
    """A non-negative value stored as an integer scaled by 100 000."""

    scaled: int

    SCALING = 100_000.0

    def __post_init__(self) -> None:
        _check_range("scaled value", self.scaled, _U32_MAX)

    @staticmethod
    def _forward(value: float) -> int:
        value = 0.0 if math.isnan(value) else max(_f32(value), 0.0)
        product = math.floor(_f32(value * ScaledFloat.SCALING)) if math.isfinite(
            _f32(value * ScaledFloat.SCALING)
        ) else math.inf
        if product == math.inf or product > _U32_MAX:
            return _U32_MAX
        return int(product)

    @staticmethod
    def _reverse(encoded: int) -> float:
        return _f32(_f32(float(encoded)) / ScaledFloat.SCALING)

    @staticmethod
    def in_range(value: float) -> bool:
        """Whether ``value`` lies in the representable range."""
        if not value >= 0.0:
            return False
        product = _f32(_f32(value) * ScaledFloat.SCALING)
        return math.floor(product) <= _f32(float(_U32_MAX)) if math.isfinite(product) else False

    @staticmethod
    def exact(value: float) -> bool:
        """Whether ``value`` survives conversion to the scaled form and back unchanged."""
        return value == ScaledFloat._reverse(ScaledFloat._forward(value))

    @classmethod
    def from_value(cls, value: float) -> "ScaledFloat":
        """Scale and quantize ``value``, clamping it into the representable range."""
        return cls(cls._forward(value))

    @classmethod
    def from_scaled(cls, val: int) -> "ScaledFloat":
        """Build from a value already scaled as per the specification."""
        return cls(val)

    def value(self) -> float:
        """The unscaled value."""
        return self._reverse(self.scaled)

    def to_bytes(self) -> bytes:
        """The 4-byte big-endian encoding, as used by the gAMA chunk."""
        return self.scaled.to_bytes(4, "big")


Chromaticity = Tuple[ScaledFloat, ScaledFloat]


@dataclass(frozen=True)
class SourceChromaticities:
    """Chromaticities of the colour space primaries and white point."""

    white: Chromaticity
    red: Chromaticity
    green: Chromaticity
    blue: Chromaticity

    @classmethod
    def from_values(
        cls,
        white: Tuple[float, float],
        red: Tuple[float, float],
        green: Tuple[float, float],
        blue: Tuple[float, float],
    ) -> "SourceChromaticities":
        """Build from unscaled (x, y) pairs."""

        def pair(xy: Tuple[float, float]) -> Chromaticity:
            x, y = xy
            return ScaledFloat.from_value(x), ScaledFloat.from_value(y)

        return cls(pair(white), pair(red), pair(green), pair(blue))

    def to_bytes(self) -> bytes:
        """The 32-byte cHRM chunk payload."""
        return b"".join(
            component.to_bytes()
            for point in (self.white, self.red, self.green, self.blue)
            for component in point
        )


class SrgbRenderingIntent(IntEnum):
    """Rendering intent of an sRGB image."""

    PERCEPTUAL = 0
    RELATIVE_COLORIMETRIC = 1
    SATURATION = 2
    ABSOLUTE_COLORIMETRIC = 3

    def to_bytes(self) -> bytes:
        """The 1-byte sRGB chunk payload."""
        return bytes([int(self)])


@dataclass
class Info:
    """Header information of a PNG image."""

    width: int = 0
    height: int = 0
    bit_depth: BitDepth = BitDepth.EIGHT
    color_type: ColorType = ColorType.GRAYSCALE
    interlaced: bool = False
    trns: Optional[bytes] = None
    pixel_dims: Optional[PixelDimensions] = None
    palette: Optional[bytes] = None
    gama_chunk: Optional[ScaledFloat] = None
    chrm_chunk: Optional[SourceChromaticities] = None
    frame_control: Optional[FrameControl] = None
    animation_control: Optional[AnimationControl] = None
    compression: Compression = Compression.FAST
    source_gamma: Optional[ScaledFloat] = None
    source_chromaticities: Optional[SourceChromaticities] = None
    srgb: Optional[SrgbRenderingIntent] = None
    icc_profile: Optional[bytes] = None
    uncompressed_latin1_text: List[object] = field(default_factory=list)
    compressed_latin1_text: List[object] = field(default_factory=list)
    utf8_text: List[object] = field(default_factory=list)

    @classmethod
    def with_size(cls, width: int, height: int) -> "Info":
        """Default info with the given dimensions."""
        return cls(width=width, height=height)

    def size(self) -> Tuple[int, int]:
        """Width and height of the image."""
        return self.width, self.height

    def is_animated(self) -> bool:
        """True if the image carries both animation and frame control."""
        return self.frame_control is not None and self.animation_control is not None

    def bits_per_pixel(self) -> int:
        """Number of bits per pixel."""
        return ColorType(self.color_type).samples() * int(self.bit_depth)

    def bytes_per_pixel(self) -> int:
        """Number of bytes per pixel, rounding sub-byte samples up."""
        return ColorType(self.color_type).samples() * ((int(self.bit_depth) + 7) >> 3)

    def bpp_in_prediction(self) -> BytesPerPixel:
        """Byte distance used by the filter prediction."""
        bpp = self.bytes_per_pixel()
        try:
            return BytesPerPixel(bpp)
        except ValueError:
            raise ValueError(f"not a possible byte rounded pixel width: {bpp}") from None

    def raw_bytes(self) -> int:
        """Bytes needed for one deinterlaced image, filter bytes included."""
        return self.height * self.raw_row_length()

    def raw_row_length(self) -> int:
        """Bytes needed for one deinterlaced row, filter byte included."""
        return self.raw_row_length_from_width(self.width)

    def checked_raw_row_length(self) -> Optional[int]:
        """Row length, or None if it does not fit the address space."""
        return ColorType(self.color_type).checked_raw_row_length(
            BitDepth(self.bit_depth), self.width
        )

    def raw_row_length_from_width(self, width: int) -> int:
        """Bytes needed for one deinterlaced row of ``width`` pixels."""
        return ColorType(self.color_type).raw_row_length_from_width(
            BitDepth(self.bit_depth), width
        )