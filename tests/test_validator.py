import io

import pytest
from werkzeug.datastructures import FileStorage, MultiDict

from errors import (
    IndexOutOfRange,
    InvalidFileName,
    InvalidIndex,
    InvalidTotal,
    MissingField,
    MissingPayload,
)
from validator import validate_chunk


def make_request(index="0", total="3", name="photo.png", payload=b"abc"):
    form = MultiDict()
    for key, value in (("index", index), ("totalChunks", total), ("fileName", name)):
        if value is not None:
            form[key] = value
    files = MultiDict()
    if payload is not None:
        files["chunk"] = FileStorage(stream=io.BytesIO(payload), filename="blob", name="chunk")
    return form, files


def test_valid_chunk():
    chunk = validate_chunk(*make_request(index="2", total="3", payload=b"hello"))
    assert chunk.index == 2
    assert chunk.total_chunks == 3
    assert chunk.file_name == "photo.png"
    assert chunk.size == 5
    assert chunk.is_last
    assert chunk.payload.read() == b"hello"


def test_first_of_many_is_not_last():
    chunk = validate_chunk(*make_request(index="0", total="3"))
    assert not chunk.is_last


@pytest.mark.parametrize("field", ["index", "total", "name"])
@pytest.mark.parametrize("value", [None, ""])
def test_missing_field(field, value):
    with pytest.raises(MissingField) as exc:
        validate_chunk(*make_request(**{field: value}))
    assert exc.value.status_code == 400


@pytest.mark.parametrize("index", ["-1", "abc", "1.5", " 1", "+1", "٣"])
def test_invalid_index(index):
    with pytest.raises(InvalidIndex, match="invalid index"):
        validate_chunk(*make_request(index=index))


@pytest.mark.parametrize("total", ["0", "-3", "three", "2e3"])
def test_invalid_total(total):
    with pytest.raises(InvalidTotal, match="invalid totalChunks"):
        validate_chunk(*make_request(total=total))


@pytest.mark.parametrize("index,total", [("5", "3"), ("3", "3")])
def test_index_out_of_range(index, total):
    with pytest.raises(IndexOutOfRange, match="index >= totalChunks"):
        validate_chunk(*make_request(index=index, total=total))


@pytest.mark.parametrize(
    "name",
    [
        "../etc/passwd", "a/b.png", "a\\b.png", "..", ".", "nul\x00.png", "x" * 256, "/abs.png",
        "photo.png.part", "photo.png.PART",
    ],
)
def test_unsafe_filename(name):
    with pytest.raises(InvalidFileName):
        validate_chunk(*make_request(name=name))


@pytest.mark.parametrize(
    "name", ["photo.png", "my photo (1).png", ".hidden", "résumé.pdf", "part.png", "x.partial"]
)
def test_safe_filename(name):
    assert validate_chunk(*make_request(name=name)).file_name == name


def test_missing_payload():
    with pytest.raises(MissingPayload, match="missing chunk file"):
        validate_chunk(*make_request(payload=None))


def test_empty_payload():
    with pytest.raises(MissingPayload):
        validate_chunk(*make_request(payload=b""))


def test_range_checked_before_payload():
    with pytest.raises(IndexOutOfRange):
        validate_chunk(*make_request(index="9", total="3", payload=None))
