import os
import shutil
from pathlib import Path
from typing import Callable, Optional, Union

from .logging_setup import core_logger
from .models import Failure, SanitizedPath, SendBody, Success, UploadedPayload
from .responses import file_body

_LOG = core_logger()


def send_file(path: SanitizedPath) -> SendBody:
    return file_body(path)


def with_tempfile_path(
    upload: Optional[UploadedPayload], step: Callable[[str], None]
) -> Optional[Failure]:
    if upload is None:
        return Failure.forbidden("Did not receive a file")
    if not upload.tempfile:
        return Failure.forbidden("File was not uploaded")
    step(upload.tempfile)
    return None


def save_file(dest_path: SanitizedPath, upload: Optional[UploadedPayload]) -> Union[Success, Failure]:
    """Move the uploaded temp file onto dest_path, replacing any existing file."""

    def _move(tempfile_path: str) -> None:
        _LOG.debug("moving %s to %s", tempfile_path, dest_path)
        shutil.move(tempfile_path, dest_path)

    return with_tempfile_path(upload, _move) or Success(f"Saved {dest_path}")


def append_file(dest_path: SanitizedPath, upload: Optional[UploadedPayload]) -> Union[Success, Failure]:
    def _append(tempfile_path: str) -> None:
        with open(dest_path, "ab") as dest_file, open(tempfile_path, "rb") as source_file:
            shutil.copyfileobj(source_file, dest_file)

    return with_tempfile_path(upload, _append) or Success(f"Appended to {dest_path}")


def touch_file(dest_path: SanitizedPath, client_path: str) -> Success:
    Path(dest_path).touch()
    return Success(f"Touched {client_path}")


def make_directory(dest_path: SanitizedPath, client_path: str) -> Success:
    # parents were created by check_modifiable
    os.mkdir(dest_path)
    return Success(f"Created directory {client_path}")


def remove_path(destroy_path: SanitizedPath) -> Success:
    """Delete a file or an empty directory. A non-empty directory raises OSError."""
    if os.path.isdir(destroy_path):
        os.rmdir(destroy_path)
        return Success(f"Removed directory {destroy_path}")
    os.remove(destroy_path)
    return Success(f"Removed file {destroy_path}")
