from __future__ import annotations

import logging
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ImagePackerSettings:
    """Options shared by `pack_file` and `unpack_file`.

    - `atomic_write`: save to a temporary file beside the output, then move
      it into place, so a failed write never leaves a partial image.
    - `output_format`: Pillow format name (e.g. "PNG", "TIFF"). When unset,
      Pillow picks the format from the output file extension.
    - `verbose`: log every step at DEBUG level (CLI only).
    """

    atomic_write: bool = True
    output_format: str | None = None
    verbose: bool = False

    @property
    def log_level(self) -> int:
        return logging.DEBUG if self.verbose else logging.WARNING

    @classmethod
    def from_args(cls, args) -> "ImagePackerSettings":
        """Build settings from a parsed `argparse.Namespace`.

        Missing attributes fall back to the defaults.
        """

        output_format = getattr(args, "format", None)
        if output_format is not None:
            output_format = output_format.strip().upper() or None

        return cls(
            atomic_write=not getattr(args, "no_atomic", False),
            output_format=output_format,
            verbose=bool(getattr(args, "verbose", False)),
        )
