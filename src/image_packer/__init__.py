"""image-packer: convert images between RGBA8888 and packed ARGB1555.

The packed form is a plain 16-bit greyscale image (e.g. a 16-bit PNG) whose
samples hold `A RRRRR GGGGG BBBBB` bit fields.
"""

from __future__ import annotations

from .errors import ImagePackerError
from .settings import ImagePackerSettings

__all__ = ["__version__", "ImagePackerError", "ImagePackerSettings"]

__version__ = "0.1.0"
