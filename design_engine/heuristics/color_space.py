"""
Color space conversion between hex strings and HSL.

All derived-color operations (complementary, triadic, analogous) rotate the
hue in HSL space and convert back, so both directions live here.
"""
import math
import re
from dataclasses import dataclass

HEX_COLOR_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6})$")
CHANNEL_PRECISION = 9


class InvalidColorFormat(ValueError):
    """Raised when a color is not a 6-digit hex string"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid hex color: {value!r} (expected #RRGGBB)")


@dataclass(frozen=True)
class HSLColor:
    """Hue in degrees [0, 360), saturation and lightness in [0, 1]"""
    h: float
    s: float
    l: float  # noqa: E741


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's rounding)"""
    return int(math.floor(value + 0.5))


def normalize_hex(hex_color: str) -> str:
    """
    Validate a hex color and return its canonical '#rrggbb' form.

    Raises:
        InvalidColorFormat: for anything other than 6 hex digits with optional '#'
    """
    if not isinstance(hex_color, str):
        raise InvalidColorFormat(hex_color)

    match = HEX_COLOR_PATTERN.match(hex_color.strip())
    if not match:
        raise InvalidColorFormat(hex_color)

    return f"#{match.group(1).lower()}"


def is_valid_hex(hex_color) -> bool:
    try:
        normalize_hex(hex_color)
    except InvalidColorFormat:
        return False
    return True


def hex_to_rgb(hex_color: str) -> tuple:
    digits = normalize_hex(hex_color)[1:]
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def hex_to_hsl(hex_color: str) -> HSLColor:
    """
    Convert '#rrggbb' to HSL.

    Fully desaturated colors (max == min) yield h=0, s=0.
    """
    r, g, b = (channel / 255 for channel in hex_to_rgb(hex_color))

    max_c = max(r, g, b)
    min_c = min(r, g, b)
    h = 0.0
    s = 0.0
    l = (max_c + min_c) / 2  # noqa: E741

    if max_c != min_c:
        d = max_c - min_c
        s = d / (2 - max_c - min_c) if l > 0.5 else d / (max_c + min_c)

        # Ties resolve to red, then green
        if max_c == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif max_c == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return HSLColor(h=h * 360, s=s, l=l)


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _channel_to_hex(value: float) -> str:
    # Snap float noise first so channels that are exactly x.5 always round up
    channel = min(max(round_half_up(round(value * 255, CHANNEL_PRECISION)), 0), 255)
    return f"{channel:02x}"


def hsl_to_hex(hsl: HSLColor) -> str:
    """Convert HSL back to a lower-case '#rrggbb' string"""
    h, s, l = hsl.h, hsl.s, hsl.l  # noqa: E741

    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        hue = h / 360
        r = _hue_to_rgb(p, q, hue + 1 / 3)
        g = _hue_to_rgb(p, q, hue)
        b = _hue_to_rgb(p, q, hue - 1 / 3)

    return f"#{_channel_to_hex(r)}{_channel_to_hex(g)}{_channel_to_hex(b)}"


def rotate_hue(hsl: HSLColor, degrees: float, saturation_scale: float = 1.0) -> HSLColor:
    """Rotate the hue, wrapping into [0, 360), optionally scaling saturation (capped at 1)"""
    return HSLColor(
        h=(hsl.h + degrees) % 360,
        s=min(hsl.s * saturation_scale, 1),
        l=hsl.l,
    )
