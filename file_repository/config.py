import os
from dataclasses import dataclass

# Example directory next to the package. Not meant for production use.
DEFAULT_FILES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "example")
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def env_bool(name: str, default: bool = False) -> bool:
    v = os.environ.get(name)
    if v is None:
        return default
    s = str(v).strip().lower()
    if s in ("1", "true", "yes", "on", "y"):
        return True
    if s in ("0", "false", "no", "off", "n"):
        return False
    return default


def env_int(name: str, default: int) -> int:
    v = os.environ.get(name)
    if v is None:
        return default
    try:
        return int(str(v).strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    files_dir: str = DEFAULT_FILES_DIR
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    debug: bool = False
    # also refuse paths that resolve (through symlinks) outside files_dir
    strict_paths: bool = False


def load_settings() -> Settings:
    return Settings(
        files_dir=os.environ.get("FILES_DIR") or DEFAULT_FILES_DIR,
        host=os.environ.get("FILES_HOST") or DEFAULT_HOST,
        port=env_int("FILES_PORT", DEFAULT_PORT),
        debug=env_bool("FILES_DEBUG", default=False),
        strict_paths=env_bool("FILES_STRICT_PATHS", default=False),
    )
