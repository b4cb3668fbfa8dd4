# pngcore

Building blocks for working with PNG and APNG images in pure Python.

`pngcore` has no runtime dependencies. It provides:

- **Chunk types** (`pngcore.chunk`): `ChunkType` wraps a four-byte chunk name
  and reports its property bits through `is_critical()`, `is_private()`,
  `reserved_set()` and `safe_to_copy()`. The same checks are available as
  module functions that accept a `ChunkType` or raw bytes. Constants such as
  `IHDR`, `PLTE`, `IDAT`, `IEND`, `tRNS`, `gAMA`, `cHRM`, `sRGB`, `iCCP`, `tEXt`,
  `zTXt`, `iTXt`, `acTL`, `fcTL` and `fdAT` name the standard chunks.
- **Adam7 interlacing** (`pngcore.adam7`): `Adam7Iterator` yields the
  `(pass, line, width)` triples of an interlaced image. `subbyte_pixels`,
  `expand_adam7_bits` and `expand_pass` write a reduced pass scanline back into
  a full `bytearray` image buffer.
- **Pixel format rules** (`pngcore.types`): `ColorType`, `BitDepth`,
  `BytesPerPixel`, `Unit`, `DisposeOp`, `BlendOp`, `Compression` and the
  `Transformations` flags. `ColorType` gives the samples per pixel, the raw row
  length (filter byte included) and whether a colour type and bit depth
  combination is forbidden. The exceptions for bad arguments are
  `ParameterError` and its subclasses `ImageBufferSizeError` and
  `PolledAfterEndOfImageError`.
- **Header metadata** (`pngcore.metadata`): `Info`, `PixelDimensions`,
  `FrameControl`, `AnimationControl`, `ScaledFloat`, `SourceChromaticities` and
  `SrgbRenderingIntent`. Each of the chunk-backed records has a `to_bytes()`
  method that returns its chunk payload (pHYs, fcTL, acTL, gAMA, cHRM, sRGB).

## Installation

```
pip install pngcore
```

To run the test suite:

```
pip install "pngcore[test]"
pytest
```

## Examples

List the Adam7 passes of a 4×4 image:

```python
from pngcore.adam7 import Adam7Iterator

print(list(Adam7Iterator(4, 4)))
# [(1, 0, 1), (4, 0, 1), (5, 0, 2), (6, 0, 2), (6, 1, 2), (7, 0, 4), (7, 1, 4)]
```

Check the properties of a chunk name:

```python
from pngcore.chunk import ChunkType, is_private

idat = ChunkType(b"IDAT")
print(idat.is_critical(), is_private(b"IDAT"))   # True False
```

Work out buffer sizes for an image:

```python
from pngcore.metadata import Info
from pngcore.types import BitDepth, ColorType

info = Info.with_size(10, 4)
info.color_type = ColorType.RGBA
info.bit_depth = BitDepth.EIGHT
print(info.raw_row_length())   # 41: one filter byte plus 40 bytes of pixels
print(info.raw_bytes())        # 164
print(ColorType.RGB.is_combination_invalid(BitDepth.FOUR))   # True
```

Encode animation and gamma payloads:

```python
from pngcore.metadata import AnimationControl, ScaledFloat

actl = AnimationControl(num_frames=3, num_plays=0)
print(actl.to_bytes().hex())   # 0000000300000000

gamma = ScaledFloat.from_value(0.45455)
print(gamma.scaled, gamma.to_bytes().hex())
```

## What it does not do

`pngcore` has no decoder or encoder. It does not read or write PNG files,
compute chunk CRCs, compress or decompress image data, apply or undo scanline
filters, or parse text chunks; the text lists on `Info` are plain lists that it
does not interpret. There is no command-line tool. The `to_bytes()` methods
return chunk payloads only, without the length, type and CRC framing of a
complete chunk.