import os
from typing import Union
from urllib.parse import quote, unquote

from .models import Failure, SanitizedPath


def encode(path: str) -> str:
    """Percent-encode a decoded path; ``decode(encode(p)) == p``."""
    return quote(path)


def decode(raw_path: str) -> str:
    return unquote(raw_path)


def sanitize(raw_path: str, root: str, strict: bool = False) -> Union[SanitizedPath, Failure]:
    """
    Percent-decode a client path and join it onto the root directory.
    Any decoded path containing ".." is refused outright. Nothing is
    canonicalized unless ``strict`` is set, in which case the joined path
    must also resolve (symlinks included) to somewhere under the root.
    """
    path = decode(raw_path)
    if ".." in path:
        return Failure.forbidden(f"Illegal path {path}")
    # os.path.join drops the root when the second part is absolute
    joined = os.path.join(root, path.lstrip("/\\"))
    if strict and not contained(joined, root):
        return Failure.forbidden(f"Illegal path {path}")
    return SanitizedPath(joined)


def contained(path: str, root: str) -> bool:
    """True if ``path`` resolves (symlinks included) to somewhere under ``root``."""
    real_root = os.path.realpath(root)
    real_path = os.path.realpath(path)
    return os.path.commonpath([real_root, real_path]) == real_root
