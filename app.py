# app.py
import logging
import os
from pathlib import Path

from flask import Flask

from config import APP_TITLE, CHUNK_SIZE_MAX, LOG_FORMAT, LOG_LEVEL, UPLOAD_DIR
from locks import LockRegistry
from routes import register_routes
from utils import ensure_dir

logger = logging.getLogger(__name__)


def create_app(overrides=None) -> Flask:
    """Build the upload app; overrides is a mapping applied on top of the defaults."""
    app = Flask(__name__)
    # allow some header overhead beyond chunk max
    app.config.update(
        UPLOAD_DIR=UPLOAD_DIR,
        MAX_CONTENT_LENGTH=CHUNK_SIZE_MAX + 1024 * 1024,
    )
    if overrides:
        app.config.update(overrides)
    app.config["UPLOAD_DIR"] = Path(app.config["UPLOAD_DIR"])

    ensure_dir(app.config["UPLOAD_DIR"])
    app.extensions["chunk_locks"] = LockRegistry()

    register_routes(app)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    app = create_app()
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8080"))
    logger.info("Starting %s on http://%s:%d (uploads in %s)", APP_TITLE, host, port, app.config["UPLOAD_DIR"])
    app.run(host=host, port=port, threaded=True)
