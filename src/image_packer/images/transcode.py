from __future__ import annotations

import logging
import sys
from array import array
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..errors import DecodeError, EncodeError, FormatMismatchError
from ..paths import atomic_output, require_input
from ..settings import ImagePackerSettings
from .color1555 import pack_argb1555, unpack_argb1555

logger = logging.getLogger(__name__)

# Pillow raw modes for one 16-bit sample per pixel, mapped to their byte order.
_U16_MODES: dict[str, str] = {
    "I;16": "little",
    "I;16L": "little",
    "I;16B": "big",
    "I;16N": sys.byteorder,
}


@dataclass(frozen=True, slots=True)
class PackedImage:
    width: int
    height: int
    pixels_1555: list[int]  # row-major, length=width*height

    def __post_init__(self) -> None:
        if len(self.pixels_1555) != self.width * self.height:
            raise ValueError("pixel buffer size mismatch")

    def to_pil(self) -> Image.Image:
        """Return a 16-bit single-channel ("I;16") Pillow image."""

        arr = array("H", self.pixels_1555)
        if sys.byteorder != "little":
            arr.byteswap()
        return Image.frombytes("I;16", (self.width, self.height), arr.tobytes())


def _require_image(img) -> None:
    if not hasattr(img, "convert"):
        raise TypeError("img must be a PIL Image")


def transcode_to_packed(img) -> PackedImage:
    """Pack every pixel of `img` to ARGB1555.

    Any Pillow mode is accepted; Pillow converts it to RGBA first.
    """

    _require_image(img)
    rgba = img if img.mode == "RGBA" else img.convert("RGBA")
    width, height = rgba.size
    data = rgba.tobytes()
    pixels = [
        pack_argb1555(r, g, b, a)
        for r, g, b, a in zip(data[0::4], data[1::4], data[2::4], data[3::4])
    ]
    return PackedImage(width=width, height=height, pixels_1555=pixels)


def packed_samples(img) -> list[int]:
    """Return the row-major 16-bit samples of a single-channel 16-bit image.

    Raises `FormatMismatchError` for any other pixel format.
    """

    _require_image(img)
    mode = img.mode

    byteorder = _U16_MODES.get(mode)
    if byteorder is not None:
        arr = array("H")
        arr.frombytes(img.tobytes())
        if byteorder != sys.byteorder:
            arr.byteswap()
        return list(arr)

    # Some Pillow releases decode 16-bit greyscale PNGs as 32-bit "I".
    # PNG has no 32-bit greyscale, so the samples still fit in 16 bits.
    if mode == "I" and getattr(img, "format", None) == "PNG":
        arr = array("i")
        arr.frombytes(img.tobytes())
        return [v & 0xFFFF for v in arr]

    raise FormatMismatchError(f"expected a single-channel 16-bit image, got mode {mode!r}")


def transcode_to_unpacked(img) -> Image.Image:
    """Unpack a 16-bit single-channel ARGB1555 image to an RGBA image."""

    samples = packed_samples(img)
    out = Image.new("RGBA", img.size)
    out.putdata([unpack_argb1555(v) for v in samples])
    return out


def _open_image(path: Path) -> Image.Image:
    try:
        img = Image.open(path)
    except UnidentifiedImageError as e:
        raise DecodeError(f"cannot identify image file {path}") from e
    except (OSError, Image.DecompressionBombError) as e:
        raise DecodeError(f"cannot open {path}: {e}") from e

    try:
        img.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        img.close()
        raise DecodeError(f"cannot decode {path}: {e}") from e
    return img


def _save_image(img: Image.Image, out_path: str | Path, settings: ImagePackerSettings) -> None:
    try:
        with atomic_output(out_path, atomic=settings.atomic_write) as dest:
            img.save(dest, format=settings.output_format)
    except OSError as e:
        # strerror omits the temporary file name.
        raise EncodeError(f"cannot write {out_path}: {e.strerror or e}") from e
    except (ValueError, KeyError) as e:
        raise EncodeError(f"cannot write {out_path}: {e}") from e


def pack_file(
    in_path: str | Path,
    out_path: str | Path,
    *,
    settings: ImagePackerSettings | None = None,
) -> PackedImage:
    """Read any decodable image and write it as a 16-bit ARGB1555 image."""

    if settings is None:
        settings = ImagePackerSettings()

    src = require_input(in_path)
    with _open_image(src) as img:
        logger.debug("decoded %s: %s %dx%d", src, img.mode, img.width, img.height)
        packed = transcode_to_packed(img)

    _save_image(packed.to_pil(), out_path, settings)
    logger.info("packed %s -> %s (%dx%d)", src, out_path, packed.width, packed.height)
    return packed


def unpack_file(
    in_path: str | Path,
    out_path: str | Path,
    *,
    settings: ImagePackerSettings | None = None,
) -> Image.Image:
    """Read a 16-bit ARGB1555 image and write it as RGBA."""

    if settings is None:
        settings = ImagePackerSettings()

    src = require_input(in_path)
    with _open_image(src) as img:
        logger.debug("decoded %s: %s %dx%d", src, img.mode, img.width, img.height)
        rgba = transcode_to_unpacked(img)

    _save_image(rgba, out_path, settings)
    logger.info("unpacked %s -> %s (%dx%d)", src, out_path, rgba.width, rgba.height)
    return rgba
