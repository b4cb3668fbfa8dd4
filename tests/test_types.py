import pytest
from hypothesis import given, strategies as st

from pngcore.types import (
    BitDepth,
    BlendOp,
    BytesPerPixel,
    ColorType,
    Compression,
    DisposeOp,
    ImageBufferSizeError,
    ParameterError,
    PolledAfterEndOfImageError,
    Transformations,
    Unit,
)

COLOR_VALUES = [c.value for c in ColorType]

VALID_COMBOS = [
    (c.value, d.value)
    for c in ColorType
    for d in BitDepth
    if not c.is_combination_invalid(d)
]

widths = st.integers(min_value=0, max_value=100_000)


def test_color_type_from_wire_value():
    assert ColorType(6) is ColorType.RGBA
    assert ColorType(3) is ColorType.INDEXED
    with pytest.raises(ValueError):
        ColorType(1)


def test_sample_relations():
    assert ColorType.RGBA.samples() == ColorType.RGB.samples() + 1
    assert ColorType.GRAYSCALE_ALPHA.samples() == ColorType.GRAYSCALE.samples() + 1
    assert ColorType.INDEXED.samples() == ColorType.GRAYSCALE.samples()


def test_bit_depth_from_value():
    assert BitDepth(16) is BitDepth.SIXTEEN
    with pytest.raises(ValueError):
        BitDepth(3)


@pytest.mark.parametrize("color_value, depth_value", VALID_COMBOS)
def test_zero_width_row_is_filter_byte_only(color_value, depth_value):
    color = ColorType(color_value)
    depth = BitDepth(depth_value)
    assert color.raw_row_length_from_width(depth, 0) == 1


@given(st.sampled_from(COLOR_VALUES), widths)
def test_eight_bit_row_length(color_value, width):
    color = ColorType(color_value)
    assert color.raw_row_length_from_width(BitDepth(8), width) == 1 + width * color.samples()


@given(st.sampled_from(COLOR_VALUES), widths)
def test_sixteen_bit_is_double_eight_bit(color_value, width):
    color = ColorType(color_value)
    eight = color.raw_row_length_from_width(BitDepth(8), width)
    sixteen = color.raw_row_length_from_width(BitDepth(16), width)
    assert sixteen - 1 == 2 * (eight - 1)


@given(
    st.sampled_from([1, 2, 4]),
    st.sampled_from([ColorType.GRAYSCALE.value, ColorType.INDEXED.value]),
    widths,
)
def test_subbyte_row_length_is_tight(depth_value, color_value, width):
    depth = BitDepth(depth_value)
    color = ColorType(color_value)
    data_bytes = color.raw_row_length_from_width(depth, width) - 1
    bits = width * color.samples() * depth_value
    assert data_bytes * 8 >= bits
    assert (data_bytes - 1) * 8 < bits or data_bytes == 0


@given(st.sampled_from(VALID_COMBOS), widths)
def test_checked_matches_unchecked(combo, width):
    color = ColorType(combo[0])
    depth = BitDepth(combo[1])
    assert color.checked_raw_row_length(depth, width) == color.raw_row_length_from_width(
        depth, width
    )


def test_width_out_of_range_rejected():
    with pytest.raises(ValueError):
        ColorType.RGB.raw_row_length_from_width(BitDepth.EIGHT, -1)
    with pytest.raises(ValueError):
        ColorType.RGB.checked_raw_row_length(BitDepth.EIGHT, 1 << 32)


@pytest.mark.parametrize(
    "color, depth",
    [
        (ColorType.RGB, BitDepth.ONE),
        (ColorType.RGBA, BitDepth.TWO),
        (ColorType.GRAYSCALE_ALPHA, BitDepth.FOUR),
        (ColorType.INDEXED, BitDepth.SIXTEEN),
    ],
)
def test_invalid_combinations(color, depth):
    assert color.is_combination_invalid(depth) is True


@pytest.mark.parametrize("depth", list(BitDepth))
def test_grayscale_valid_at_every_depth(depth):
    assert ColorType.GRAYSCALE.is_combination_invalid(depth) is False


def test_rgb_valid_at_eight_and_sixteen():
    assert ColorType.RGB.is_combination_invalid(BitDepth.EIGHT) is False
    assert ColorType.RGB.is_combination_invalid(BitDepth.SIXTEEN) is False


def test_bytes_per_pixel_lookup():
    assert BytesPerPixel(6) is BytesPerPixel.SIX
    with pytest.raises(ValueError):
        BytesPerPixel(5)


def test_unit_values():
    assert Unit(1) is Unit.METER
    with pytest.raises(ValueError):
        Unit(2)


def test_dispose_op_display():
    assert str(DisposeOp.NONE) == "DISPOSE_OP_NONE"
    assert str(DisposeOp.BACKGROUND) == "DISPOSE_OP_BACKGROUND"
    assert str(DisposeOp.PREVIOUS) == "DISPOSE_OP_PREVIOUS"
    with pytest.raises(ValueError):
        DisposeOp(3)


def test_blend_op_display():
    assert str(BlendOp.SOURCE) == "BLEND_OP_SOURCE"
    assert str(BlendOp.OVER) == "BLEND_OP_OVER"
    assert BlendOp(1) is BlendOp.OVER


def test_compression_members_distinct():
    assert len(set(Compression)) == len(Compression.__members__)
    assert Compression("fast") is Compression.FAST


def test_normalize_to_color8():
    flags = Transformations.normalize_to_color8()
    assert flags == Transformations.EXPAND | Transformations.STRIP_16
    assert Transformations.EXPAND in flags
    assert Transformations.ALPHA not in flags


def test_identity_is_empty():
    identity = Transformations(0)
    assert identity == Transformations.IDENTITY
    assert not identity
    assert identity | Transformations.EXPAND == Transformations.EXPAND


def test_image_buffer_size_error():
    err = ImageBufferSizeError(expected=10, actual=5)
    assert isinstance(err, ParameterError)
    assert str(err) == "wrong data size, expected 10 got 5"
    assert (err.expected, err.actual) == (10, 5)


def test_polled_after_end_error():
    err = PolledAfterEndOfImageError()
    assert isinstance(err, ParameterError)
    assert "End of image has been reached" in str(err)