from __future__ import annotations

import importlib
from pathlib import Path

import pytest
from PIL import Image

from image_packer import __version__
from image_packer.cli import main
from image_packer.images.transcode import packed_samples


def test_cli_pack_and_unpack(tmp_path: Path) -> None:
    src = tmp_path / "in.png"
    packed = tmp_path / "packed.png"
    out = tmp_path / "out.png"
    Image.new("RGBA", (3, 1), (255, 0, 0, 255)).save(src)

    assert main(["pack", str(src), str(packed)]) == 0
    with Image.open(packed) as img:
        assert packed_samples(img) == [0xFC00] * 3

    assert main(["unpack", str(packed), str(out)]) == 0
    with Image.open(out) as img:
        assert img.getpixel((2, 0)) == (255, 0, 0, 255)


def test_cli_unpack_format_mismatch(tmp_path: Path, capsys) -> None:
    src = tmp_path / "rgb.png"
    Image.new("RGB", (2, 2)).save(src)

    assert main(["unpack", str(src), str(tmp_path / "out.png")]) == 1

    err = capsys.readouterr().err
    assert err.startswith("error: ")
    assert "16-bit" in err


def test_cli_missing_input(tmp_path: Path, capsys) -> None:
    assert main(["pack", str(tmp_path / "missing.png"), str(tmp_path / "out.png")]) == 1
    assert "not found" in capsys.readouterr().err


def test_cli_requires_command(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_cli_version(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_cli_oversized_input(tmp_path: Path, capsys, monkeypatch) -> None:
    src = tmp_path / "big.png"
    Image.new("RGBA", (64, 64)).save(src)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    assert main(["pack", str(src), str(tmp_path / "out.png")]) == 1
    assert capsys.readouterr().err.startswith("error: ")


def test_main_module_import_does_not_run_cli() -> None:
    module = importlib.import_module("image_packer.__main__")
    assert module.main is main
