import os
import stat

import pytest

from packcli.filesystem import copy_dir, copy_file, maybe_create_destination_dir
from packcli.log import TestLogger


def test_copy_dir_into_new_destination(tmp_path):
    old_dir = tmp_path / "old"
    new_dir = tmp_path / "new"
    old_dir.mkdir()
    new_dir.mkdir()
    (old_dir / "test").mkdir()
    (old_dir / "test" / "test.txt").write_bytes(b"test")

    copy_dir(old_dir, new_dir / "test", False, TestLogger())

    assert sorted(os.listdir(new_dir)) == ["test"]
    assert sorted(os.listdir(new_dir / "test")) == ["test"]
    assert sorted(os.listdir(new_dir / "test" / "test")) == ["test.txt"]
    assert (new_dir / "test" / "test" / "test.txt").read_bytes() == b"test"


def test_copy_dir_rejects_existing_destination(tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    destination = tmp_path / "dst"
    destination.mkdir()
    messages = []
    with pytest.raises(FileExistsError):
        copy_dir(source, destination, False, TestLogger(messages.append))
    assert messages == ["destination already exists"]


def test_copy_dir_rejects_file_source(tmp_path):
    source = tmp_path / "file.txt"
    source.write_text("data")
    messages = []
    with pytest.raises(NotADirectoryError):
        copy_dir(source, tmp_path / "dst", False, TestLogger(messages.append))
    assert messages == ["source is not a directory"]


def test_copy_dir_missing_source_logs_and_raises(tmp_path):
    messages = []
    with pytest.raises(FileNotFoundError):
        copy_dir(tmp_path / "nope", tmp_path / "dst", False, TestLogger(messages.append))
    assert messages[0].startswith("error getting source directory info:")


def test_copy_dir_overwrite_into_existing(tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    (source / "a.txt").write_text("new")
    destination = tmp_path / "dst"
    destination.mkdir()
    (destination / "a.txt").write_text("old")
    (destination / "keep.txt").write_text("keep")

    copy_dir(source, destination, True, TestLogger())

    assert (destination / "a.txt").read_text() == "new"
    assert (destination / "keep.txt").read_text() == "keep"


def test_copy_dir_skips_symlinked_files(tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    (source / "real.txt").write_text("real")
    os.symlink(source / "real.txt", source / "link.txt")

    copy_dir(source, tmp_path / "dst", False, TestLogger())

    assert sorted(os.listdir(tmp_path / "dst")) == ["real.txt"]


def test_copy_file_copies_content_and_mode(tmp_path):
    source = tmp_path / "a.sh"
    source.write_bytes(b"#!/bin/sh\necho hi\n")
    os.chmod(source, 0o750)
    destination = tmp_path / "b.sh"

    copy_file(source, destination, TestLogger())

    assert destination.read_bytes() == source.read_bytes()
    assert stat.S_IMODE(os.stat(destination).st_mode) == 0o750


def test_copy_file_missing_source(tmp_path):
    messages = []
    with pytest.raises(FileNotFoundError):
        copy_file(tmp_path / "missing", tmp_path / "out", TestLogger(messages.append))
    assert messages[0].startswith("error opening source file:")
    assert not (tmp_path / "out").exists()


def test_maybe_create_destination_dir_creates_nested(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    maybe_create_destination_dir(target)
    assert target.is_dir()


def test_maybe_create_destination_dir_existing_is_fine(tmp_path):
    maybe_create_destination_dir(tmp_path)
    assert tmp_path.is_dir()


def test_maybe_create_destination_dir_err_on_exists(tmp_path):
    with pytest.raises(FileExistsError):
        maybe_create_destination_dir(tmp_path, err_on_exists=True)