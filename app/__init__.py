# app/__init__.py
from flask import Flask
import logging
import os

from .config import AppConfig

def create_app(test_config=None):
    app = Flask(__name__, static_folder="../static")
    app.config.from_object(AppConfig)
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app.config["UPLOAD_FOLDER"] = os.path.abspath(app.config["UPLOAD_FOLDER"])
    app.config["OUTPUT_FOLDER"] = os.path.abspath(app.config["OUTPUT_FOLDER"])
    os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)
    os.makedirs(app.config["OUTPUT_FOLDER"], exist_ok=True)

    from .web.routes import bp
    app.register_blueprint(bp)

    return app
