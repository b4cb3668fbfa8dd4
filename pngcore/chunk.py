"""PNG chunk types and the property bits encoded in their names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = [
    "ChunkType",
    "is_critical",
    "is_private",
    "reserved_set",
    "safe_to_copy",
    "IHDR",
    "PLTE",
    "IDAT",
    "IEND",
    "tRNS",
    "bKGD",
    "tIME",
    "pHYs",
    "cHRM",
    "gAMA",
    "sRGB",
    "iCCP",
    "tEXt",
    "zTXt",
    "iTXt",
    "acTL",
    "fcTL",
    "fdAT",
]

_PROPERTY_BIT = 32

_ESCAPES = {"\t": "\\t", "\r": "\\r", "\n": "\\n", "\\": "\\\\", "'": "\\'", '"': '\\"'}


def _escape(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char.isprintable():
        return char
    return f"\\u{{{ord(char):x}}}"


@dataclass(frozen=True)
class ChunkType:
    """The four-byte type code of a PNG chunk."""

    raw: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) != 4:
            raise ValueError(f"chunk type must be exactly 4 bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    def is_critical(self) -> bool:
        """True if the chunk is critical (ancillary bit clear)."""
        return self.raw[0] & _PROPERTY_BIT == 0

    def is_private(self) -> bool:
        """True if the chunk is private."""
        return self.raw[1] & _PROPERTY_BIT != 0

    def reserved_set(self) -> bool:
        """True if the reserved bit is set, which makes the name invalid."""
        return self.raw[2] & _PROPERTY_BIT != 0

    def safe_to_copy(self) -> bool:
        """True if the chunk is safe to copy when unknown."""
        return self.raw[3] & _PROPERTY_BIT != 0

    @property
    def name(self) -> str:
        return "".join(_escape(c) for c in self.raw.decode("latin-1"))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f"ChunkType(type={self.name}, critical={self.is_critical()}, "
            f"private={self.is_private()}, reserved={self.reserved_set()}, "
            f"safecopy={self.safe_to_copy()})"
        )


ChunkLike = Union[ChunkType, bytes, bytearray]


def _as_chunk_type(chunk_type: ChunkLike) -> ChunkType:
    if isinstance(chunk_type, ChunkType):
        return chunk_type
    return ChunkType(bytes(chunk_type))


def is_critical(chunk_type: ChunkLike) -> bool:
    """Return True if the chunk is critical."""
    return _as_chunk_type(chunk_type).is_critical()


def is_private(chunk_type: ChunkLike) -> bool:
    """Return True if the chunk is private."""
    return _as_chunk_type(chunk_type).is_private()


def reserved_set(chunk_type: ChunkLike) -> bool:
    """Return True if the reserved bit of the chunk name is set."""
    return _as_chunk_type(chunk_type).reserved_set()


def safe_to_copy(chunk_type: ChunkLike) -> bool:
    """Return True if the chunk is safe to copy if unknown."""
    return _as_chunk_type(chunk_type).safe_to_copy()


# Critical chunks
IHDR = ChunkType(b"IHDR")
PLTE = ChunkType(b"PLTE")
IDAT = ChunkType(b"IDAT")
IEND = ChunkType(b"IEND")

# Ancillary chunks
tRNS = ChunkType(b"tRNS")
bKGD = ChunkType(b"bKGD")
tIME = ChunkType(b"tIME")
pHYs = ChunkType(b"pHYs")
cHRM = ChunkType(b"cHRM")
gAMA = ChunkType(b"gAMA")
sRGB = ChunkType(b"sRGB")
iCCP = ChunkType(b"iCCP")
tEXt = ChunkType(b"tEXt")
zTXt = ChunkType(b"zTXt")
iTXt = ChunkType(b"iTXt")

# Animation extension chunks
acTL = ChunkType(b"acTL")
fcTL = ChunkType(b"fcTL")
fdAT = ChunkType(b"fdAT")