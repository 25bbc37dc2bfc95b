# utils.py
from pathlib import Path

from werkzeug.security import safe_join

from config import PART_SUFFIX

MAX_NAME_LENGTH = 255


def ensure_dir(path) -> Path:
    """Create the directory (and parents) if missing; safe to call repeatedly."""
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_safe_filename(name: str) -> bool:
    """True when name can be used as a single file name inside the upload dir."""
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    if name in (".", "..") or "\x00" in name:
        return False
    if "/" in name or "\\" in name:
        return False
    # final name of "x.part" would be the working file of "x"
    if name.lower().endswith(PART_SUFFIX):
        return False
    # safe_join also rejects absolute and drive-qualified names on Windows
    return safe_join("uploads", name) is not None
