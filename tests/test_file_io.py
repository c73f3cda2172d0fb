from pathlib import Path

import pytest

from infra.file_io import read_text_file, write_text_file


def test_write_then_read_preserves_content(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "out.csv"
    written = write_text_file(target, "a,b\r\nc,d\n")

    assert written == target
    assert read_text_file(target) == "a,b\r\nc,d\n"


def test_write_truncates_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "out.csv"
    target.write_text("x" * 100, encoding="utf-8")

    write_text_file(target, "short\n")

    assert target.read_text(encoding="utf-8") == "short\n"


def test_read_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_text_file(tmp_path / "missing.csv")


def test_read_with_wrong_encoding_raises_unicode_error(tmp_path: Path) -> None:
    target = tmp_path / "latin.csv"
    target.write_bytes("Bohrung-ä".encode("latin-1"))

    with pytest.raises(UnicodeDecodeError):
        read_text_file(target, encoding="utf-8")
    assert read_text_file(target, encoding="latin-1") == "Bohrung-ä"
