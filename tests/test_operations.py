import os

import pytest

from file_repository.models import BufferedBody, Failure, StreamedBody, Success, UploadedPayload
from file_repository.operations import (
    append_file,
    make_directory,
    remove_path,
    save_file,
    send_file,
    touch_file,
)


def test_send_streams_sized_file(root_dir):
    target = root_dir / "readme.txt"
    target.write_bytes(b"hello")
    body = send_file(str(target))
    assert isinstance(body, StreamedBody)
    assert body.size == 5
    assert body.content_type == "text/plain"


def test_send_buffers_when_no_size(root_dir):
    target = root_dir / "empty.txt"
    target.write_bytes(b"")
    body = send_file(str(target))
    assert isinstance(body, BufferedBody)
    assert body.size == 0
    assert body.data == b""


def test_save_moves_upload(root_dir, upload_file):
    src = upload_file(b"new contents")
    dest = root_dir / "target.txt"
    dest.write_bytes(b"old")

    result = save_file(str(dest), UploadedPayload(tempfile=str(src), filename="target.txt"))

    assert result == Success(f"Saved {dest}")
    assert dest.read_bytes() == b"new contents"
    assert not src.exists()


@pytest.mark.parametrize("op", [save_file, append_file])
def test_missing_upload(root_dir, op):
    dest = str(root_dir / "x.txt")
    assert op(dest, None) == Failure.forbidden("Did not receive a file")
    assert op(dest, UploadedPayload(tempfile=None)) == Failure.forbidden("File was not uploaded")
    assert not os.path.exists(dest)


def test_append_keeps_upload(root_dir, upload_file):
    src = upload_file(b" world")
    dest = root_dir / "notes.txt"
    dest.write_bytes(b"hello")

    result = append_file(str(dest), UploadedPayload(tempfile=str(src)))

    assert result == Success(f"Appended to {dest}")
    assert dest.read_bytes() == b"hello world"
    assert src.exists()


def test_append_creates_missing_target(root_dir, upload_file):
    src = upload_file(b"first")
    dest = root_dir / "fresh.txt"
    append_file(str(dest), UploadedPayload(tempfile=str(src)))
    assert dest.read_bytes() == b"first"


def test_touch(root_dir):
    dest = root_dir / "touched.txt"
    assert touch_file(str(dest), "/touched.txt") == Success("Touched /touched.txt")
    assert dest.read_bytes() == b""


def test_make_directory(root_dir):
    dest = root_dir / "newdir"
    assert make_directory(str(dest), "/newdir") == Success("Created directory /newdir")
    assert dest.is_dir()


def test_make_directory_existing_raises(root_dir):
    (root_dir / "newdir").mkdir()
    with pytest.raises(FileExistsError):
        make_directory(str(root_dir / "newdir"), "/newdir")


def test_remove_file_and_empty_directory(root_dir):
    f = root_dir / "a.txt"
    f.write_text("x")
    d = root_dir / "empty"
    d.mkdir()

    assert remove_path(str(f)) == Success(f"Removed file {f}")
    assert remove_path(str(d)) == Success(f"Removed directory {d}")
    assert not f.exists()
    assert not d.exists()


def test_remove_non_empty_directory_raises(root_dir):
    d = root_dir / "tree"
    d.mkdir()
    (d / "leaf.txt").write_text("x")
    with pytest.raises(OSError):
        remove_path(str(d))
    assert (d / "leaf.txt").exists()
