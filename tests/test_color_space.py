import pytest

from heuristics.color_space import (
    HSLColor,
    InvalidColorFormat,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    is_valid_hex,
    normalize_hex,
    rotate_hue,
    round_half_up,
)


def test_pure_red_to_hsl():
    assert hex_to_hsl("#ff0000") == HSLColor(h=0, s=1, l=0.5)


def test_white_and_black_are_desaturated():
    white = hex_to_hsl("#ffffff")
    black = hex_to_hsl("#000000")

    assert (white.h, white.s, white.l) == (0, 0, 1)
    assert (black.h, black.s, black.l) == (0, 0, 0)


def test_pure_green_from_hsl():
    assert hsl_to_hex(HSLColor(h=120, s=1, l=0.5)) == "#00ff00"


def test_gray_rounds_half_up():
    # 0.5 * 255 = 127.5
    assert hsl_to_hex(HSLColor(h=0, s=0, l=0.5)) == "#808080"


@pytest.mark.parametrize("color", [
    "#3b82f6", "#dc2626", "#10b981", "#f59e0b", "#1e293b", "#fef7ed", "#8b5cf6", "#7f7f7f",
])
def test_round_trip_within_one_unit_per_channel(color):
    back = hsl_to_hex(hex_to_hsl(color))

    for original, restored in zip(hex_to_rgb(color), hex_to_rgb(back)):
        assert abs(original - restored) <= 1


def test_input_is_case_insensitive_and_hash_optional():
    assert hex_to_hsl("#FF0000") == hex_to_hsl("ff0000")
    assert normalize_hex(" #AbCdEf ") == "#abcdef"


@pytest.mark.parametrize("bad", ["#ff000", "#gggggg", "red", "", "#fff", "#ff00001", None, 123])
def test_invalid_hex_raises(bad):
    with pytest.raises(InvalidColorFormat):
        hex_to_hsl(bad)
    assert is_valid_hex(bad) is False


def test_invalid_hex_is_a_value_error():
    with pytest.raises(ValueError) as excinfo:
        normalize_hex("blue")
    assert excinfo.value.value == "blue"


def test_rotate_hue_wraps_and_caps_saturation():
    rotated = rotate_hue(HSLColor(h=300, s=0.9, l=0.4), 120, saturation_scale=2)

    assert rotated.h == 60
    assert rotated.s == 1
    assert rotated.l == 0.4


def test_rotate_hue_negative_degrees():
    assert rotate_hue(HSLColor(h=10, s=0.5, l=0.5), -30).h == 340


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


@pytest.mark.parametrize("channel, expected", [(81.5, "#525252"), (134.5, "#878787"), (227.5, "#e4e4e4")])
def test_exact_half_channels_round_up(channel, expected):
    assert hsl_to_hex(HSLColor(h=0, s=0, l=channel / 255)) == expected


def test_round_trip_across_channel_grid():
    steps = range(0, 256, 15)
    for r in steps:
        for g in steps:
            for b in steps:
                color = f"#{r:02x}{g:02x}{b:02x}"
                restored = hex_to_rgb(hsl_to_hex(hex_to_hsl(color)))
                assert all(abs(a - c) <= 1 for a, c in zip((r, g, b), restored)), color
