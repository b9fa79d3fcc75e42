"""Pre-operation checks.

Each guard takes a sanitized path and returns either that path (the check
passed) or a ``Failure``. ``then`` runs the next step only on success.
"""

import os
from typing import Callable, TypeVar, Union

from .logging_setup import core_logger
from .models import Failure, SanitizedPath

T = TypeVar("T")

GuardResult = Union[SanitizedPath, Failure]

_LOG = core_logger()


def then(result: Union[T, Failure], step: Callable[[T], object]):
    if isinstance(result, Failure):
        return result
    return step(result)


def check_readable(path: SanitizedPath, client_path: str) -> GuardResult:
    if not os.path.isfile(path):
        return Failure.not_found(client_path)
    if not os.access(path, os.R_OK):
        return Failure.forbidden(f"Cannot read {client_path}")
    return path


def parent_directory(path: str) -> str:
    # Split on the separator rather than os.path.dirname so a trailing
    # separator names the directory itself.
    return os.sep.join(path.split(os.sep)[:-1])


def _client_dir(client_path: str) -> str:
    return client_path.rsplit("/", 1)[0] or "/"


def check_modifiable(path: SanitizedPath, client_path: str) -> GuardResult:
    """Create missing parent directories, then check that the target may be written."""
    dir_name = parent_directory(path)
    try:
        os.makedirs(dir_name, exist_ok=True)
    except PermissionError as e:
        _LOG.info("mkdir refused for %s: %s", dir_name, e.strerror)
        return Failure.forbidden(f"Cannot create directory {_client_dir(client_path)} due to {e.strerror}")

    if not os.access(dir_name, os.W_OK):
        return Failure.forbidden(f"Cannot write to directory {_client_dir(client_path)}")

    if os.path.isfile(path) and not os.access(path, os.W_OK):
        return Failure.forbidden(f"Cannot write to file {client_path}")

    return path


def check_removable(path: SanitizedPath, client_path: str) -> GuardResult:
    if not os.path.exists(path):
        return Failure.not_found(client_path)
    if not os.access(path, os.W_OK):
        return Failure.forbidden(f"Cannot modify {client_path}")
    return path
