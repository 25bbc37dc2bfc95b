import io

import pytest

from app import create_app


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(upload_dir):
    return create_app({"UPLOAD_DIR": upload_dir, "TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


def chunk_form(data: bytes, index, total, name):
    """Multipart body for one chunk, shaped like the browser's FormData."""
    return {
        "chunk": (io.BytesIO(data), "blob"),
        "index": str(index),
        "totalChunks": str(total),
        "fileName": name,
    }


@pytest.fixture
def send_chunk(client):
    def send(data, index, total, name, c=None):
        return (c or client).post(
            "/upload",
            data=chunk_form(data, index, total, name),
            content_type="multipart/form-data",
        )
    return send
