# finalizer.py
import logging
import os

from errors import FinalizeError
from writer import final_path, part_path

logger = logging.getLogger(__name__)


def finalize(upload_dir, file_name: str) -> str:
    """Promote the finished working file to its final name with a single rename.

    Both paths share a directory, so readers see either no final file or the
    complete one. An existing final file of the same name is replaced.
    """
    src = part_path(upload_dir, file_name)
    dst = final_path(upload_dir, file_name)
    try:
        os.replace(src, dst)
    except OSError as e:
        logger.error("rename error %s -> %s: %s", src, dst, e)
        raise FinalizeError(src, dst, e) from e
    logger.info("upload complete: %s", dst)
    return dst
