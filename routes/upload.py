# routes/upload.py
import logging

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from errors import FinalizeError, UploadError
from finalizer import finalize
from utils import ensure_dir
from validator import validate_chunk
from writer import received_bytes, write_chunk

logger = logging.getLogger(__name__)

bp = Blueprint("upload", __name__)


@bp.app_errorhandler(HTTPException)
def http_error(e: HTTPException):
    """Render werkzeug's HTTP errors (405, 413, ...) in the same JSON envelope."""
    return jsonify(error=e.description), e.code


@bp.post("/upload")
def upload_chunk():
    """Receive one chunk: validate, lock the file name, append, finalize on the last one."""
    try:
        chunk = validate_chunk(request.form, request.files)
    except UploadError as e:
        logger.warning("rejected chunk for %r: %s", request.form.get("fileName"), e.message)
        return jsonify(error=e.message), e.status_code

    upload_dir = current_app.config["UPLOAD_DIR"]
    try:
        ensure_dir(upload_dir)
    except OSError as e:
        logger.error("cannot create upload dir %s: %s", upload_dir, e)
        return jsonify(error="cannot create upload dir"), 500

    locks = current_app.extensions["chunk_locks"]
    with locks.hold(chunk.file_name):
        try:
            write_chunk(upload_dir, chunk.file_name, chunk.index, chunk.payload, chunk.size)

            if chunk.is_last:
                try:
                    path = finalize(upload_dir, chunk.file_name)
                except FinalizeError as e:
                    return jsonify(
                        status="ok",
                        done=True,
                        path=e.final_path,
                        note=f"{e}; data kept at {e.part_path}",
                    )
                return jsonify(status="ok", done=True, path=path)

            received = received_bytes(upload_dir, chunk.file_name)
        except UploadError as e:
            logger.error("chunk %d of %s failed: %s", chunk.index, chunk.file_name, e.message)
            return jsonify(error=e.message), e.status_code

    return jsonify(status="ok", received=received)
