# routes/__init__.py
from .upload import bp as upload_bp

def register_routes(app):
    app.register_blueprint(upload_bp)
