"""Provides an app factory for the task API."""
import json
import traceback
from datetime import datetime

from flask import Flask, request

from db import engine
from models import Base
from utils.cors import cors_response, json_response

REGISTERED: list[str] = []
FAILURES: dict[str, dict] = {}


def _try(app: Flask, modpath: str, name: str) -> None:
    try:
        mod = __import__(modpath, fromlist=["bp"])
        app.register_blueprint(getattr(mod, "bp"))
        REGISTERED.append(name)
    except Exception as e:
        FAILURES[name] = {"error": repr(e), "trace": traceback.format_exc()}


def create_app() -> Flask:
    """Initialize an instance of the task API."""
    app = Flask("tasks_api")

    # Local SQLite runs have no migration step
    if engine.url.get_backend_name() == "sqlite":
        Base.metadata.create_all(engine)

    REGISTERED.clear()
    FAILURES.clear()

    _try(app, "routes.auth", "auth")
    _try(app, "routes.tasks", "tasks")

    @app.route("/api/ping", methods=["GET"])
    def ping():
        return cors_response("ok")

    @app.route("/health", methods=["GET"])
    def health():
        return json_response({
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.utcnow().isoformat(),
        })

    # Diagnostics (read-only)
    @app.route("/api/_diag", methods=["GET"])
    def diag():
        return cors_response(
            json.dumps({"registered": REGISTERED, "failures": FAILURES}),
            200,
            "application/json",
        )

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith("/api"):
            return json_response({"success": False, "error": "NotFound", "message": "API Route not found"}, 404)
        return cors_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return json_response({"success": False, "error": "MethodNotAllowed", "message": "Method not allowed"}, 405)

    return app
