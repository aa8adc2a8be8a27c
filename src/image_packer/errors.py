from __future__ import annotations


class ImagePackerError(Exception):
    """Base exception for image-packer."""


class InputNotFoundError(ImagePackerError, FileNotFoundError):
    """Raised when the input image does not exist."""


class InputUnreadableError(ImagePackerError, OSError):
    """Raised when the input path exists but cannot be read as a file."""


class DecodeError(ImagePackerError):
    """Raised when the input bytes are not an image Pillow can decode."""


class FormatMismatchError(ImagePackerError, ValueError):
    """Raised when an image is not single-channel 16-bit where one is required."""


class EncodeError(ImagePackerError):
    """Raised when the output image cannot be encoded or written."""
