# writer.py
import logging
import os

from config import COPY_BUFFER_SIZE, PART_SUFFIX
from errors import CannotOpenWorkingFile, IncompleteWrite, StatError, WriteError

logger = logging.getLogger(__name__)


def part_path(upload_dir, file_name: str) -> str:
    return os.path.join(str(upload_dir), file_name + PART_SUFFIX)


def final_path(upload_dir, file_name: str) -> str:
    return os.path.join(str(upload_dir), file_name)


def write_chunk(upload_dir, file_name: str, index: int, payload, expected_size: int) -> int:
    """Append one chunk to the working file and return the number of bytes written.

    Chunk 0 truncates whatever partial data the working file held, every other
    index appends. The caller must hold the lock for file_name.
    """
    path = part_path(upload_dir, file_name)
    mode = "wb" if index == 0 else "ab"

    try:
        out = open(path, mode)
    except OSError as e:
        logger.error("cannot open %s: %s", path, e)
        raise CannotOpenWorkingFile(f"cannot open part file: {e}") from e

    written = 0
    # close() flushes buffered bytes, so it can fail too
    try:
        with out:
            while True:
                buf = payload.read(COPY_BUFFER_SIZE)
                if not buf:
                    break
                written += out.write(buf)
    except OSError as e:
        logger.error("write error on %s after %d bytes: %s", path, written, e)
        raise WriteError(f"write error: {e}") from e

    if written != expected_size:
        logger.error("short write on %s: %d of %d bytes", path, written, expected_size)
        raise IncompleteWrite(f"incomplete write: {written} of {expected_size} bytes")

    action = "wrote" if index == 0 else "appended"
    logger.info("%s chunk index=%d (%d bytes) to %s", action, index, written, path)
    return written


def received_bytes(upload_dir, file_name: str) -> int:
    """Size of the working file, i.e. bytes received so far for this upload."""
    path = part_path(upload_dir, file_name)
    try:
        return os.stat(path).st_size
    except OSError as e:
        logger.error("cannot stat %s: %s", path, e)
        raise StatError(f"cannot stat part file: {e}") from e
