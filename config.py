# config.py
import os
from pathlib import Path

APP_TITLE = "Chunk Drop"

UPLOAD_DIR = Path(os.environ.get("UPLOAD_DIR", "uploads"))

CHUNK_SIZE_MAX = int(os.environ.get("CHUNK_SIZE_MAX", 32 * 1024 * 1024))  # 32 MiB per chunk
COPY_BUFFER_SIZE = 1024 * 1024                                          # 1 MiB copy loop buffer

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

PART_SUFFIX = ".part"
