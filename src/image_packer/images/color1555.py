from __future__ import annotations

ALPHA_BIT = 0x8000
CHANNEL_MASK = 0x1F
RED_SHIFT = 10
GREEN_SHIFT = 5


def quantize_channel(c: int) -> int:
    """Scale an 8-bit channel to 5 bits, rounding to nearest."""

    return (int(c) * 31 + 127) // 255


def expand_channel(c5: int) -> int:
    """Scale a 5-bit channel back to 8 bits, rounding to nearest."""

    return (int(c5) * 255 + 15) // 31


def split_argb1555(value: int) -> tuple[int, int, int, int]:
    """Return the raw `(alpha_bit, r5, g5, b5)` fields of a 16-bit value."""

    value = int(value) & 0xFFFF
    return (
        (value >> 15) & 1,
        (value >> RED_SHIFT) & CHANNEL_MASK,
        (value >> GREEN_SHIFT) & CHANNEL_MASK,
        value & CHANNEL_MASK,
    )


def pack_argb1555(r: int, g: int, b: int, a) -> int:
    """Convert RGBA8888 to ARGB1555.

    `a` may be a bool or an 8-bit alpha channel; any `a > 0` becomes opaque
    (alpha bit set). Channels are expected in `[0, 255]`.
    """

    alpha = ALPHA_BIT if int(a) > 0 else 0
    r5 = quantize_channel(r)
    g5 = quantize_channel(g)
    b5 = quantize_channel(b)
    return alpha | (r5 << RED_SHIFT) | (g5 << GREEN_SHIFT) | b5


def unpack_argb1555(value: int) -> tuple[int, int, int, int]:
    """Convert 16-bit ARGB1555 to RGBA8888.

    Alpha expands to 0 or 255 only.
    """

    a_bit, r5, g5, b5 = split_argb1555(value)
    a = 255 if a_bit else 0
    return expand_channel(r5), expand_channel(g5), expand_channel(b5), a
