import pytest

import storage


def test_text_round_trip_keeps_newlines(tmp_path):
    path = tmp_path / "tree.txt"
    content = "0\r1\n1\r\n é"
    storage.save_text(str(path), content)
    assert storage.load_text(str(path)) == content


def test_save_overwrites(tmp_path):
    path = tmp_path / "tree.txt"
    storage.save_text(str(path), "first")
    storage.save_text(str(path), "2")
    assert storage.load_text(str(path)) == "2"


def test_bytes_round_trip(tmp_path):
    path = tmp_path / "payload.bin"
    storage.save_bytes(str(path), b"\x00\xffHUF1")
    assert storage.load_bytes(str(path)) == b"\x00\xffHUF1"


def test_io_errors_propagate(tmp_path):
    with pytest.raises(FileNotFoundError):
        storage.load_text(str(tmp_path / "missing.txt"))
    with pytest.raises(OSError):
        storage.save_text(str(tmp_path / "no" / "such" / "dir.txt"), "x")
