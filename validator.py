# validator.py
import io
from typing import BinaryIO, NamedTuple

from errors import (
    IndexOutOfRange,
    InvalidFileName,
    InvalidIndex,
    InvalidTotal,
    MissingField,
    MissingPayload,
)
from utils import is_safe_filename


class Chunk(NamedTuple):
    index: int
    total_chunks: int
    file_name: str
    payload: BinaryIO
    size: int

    @property
    def is_last(self) -> bool:
        return self.index == self.total_chunks - 1


def _parse_count(value: str):
    """Parse a plain decimal string; None for signs, spaces or non-ASCII digits."""
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def _payload_size(stream) -> int:
    pos = stream.tell()
    stream.seek(0, io.SEEK_END)
    size = stream.tell() - pos
    stream.seek(pos)
    return size


def validate_chunk(form, files) -> Chunk:
    """Check one chunk request's fields without touching the upload directory.

    form and files are the request's multidicts (request.form, request.files).
    Raises a ClientError subclass describing the first problem found.
    """
    file_name = form.get("fileName", "")
    index_raw = form.get("index", "")
    total_raw = form.get("totalChunks", "")

    if not file_name or not index_raw or not total_raw:
        raise MissingField("missing index/totalChunks/fileName")

    index = _parse_count(index_raw)
    if index is None:
        raise InvalidIndex("invalid index")

    total_chunks = _parse_count(total_raw)
    if total_chunks is None or total_chunks <= 0:
        raise InvalidTotal("invalid totalChunks")

    if index >= total_chunks:
        raise IndexOutOfRange("index >= totalChunks")

    if not is_safe_filename(file_name):
        raise InvalidFileName("invalid fileName")

    storage = files.get("chunk")
    if storage is None:
        raise MissingPayload("missing chunk file")
    try:
        size = _payload_size(storage.stream)
    except (OSError, ValueError) as e:
        raise MissingPayload(f"missing chunk file: {e}") from e
    if size == 0:
        raise MissingPayload("missing chunk file: empty chunk")

    return Chunk(index, total_chunks, file_name, storage.stream, size)
