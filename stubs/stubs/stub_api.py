"""
Minimal in-memory JSON API used as the system under test by the integration,
acceptance and behave suites.

Routes (all below ``/api``):

    GET    /health            -> {"status": "healthy"}
    POST   /login             -> {"token": ..., "user": {...}}
    GET    /users             -> list of users, optionally filtered by ?name=
    POST   /users             -> create a user (bearer token required)
    GET    /users/<id>        -> a single user
    PUT    /users/<id>        -> replace a user (bearer token required)
    PATCH  /users/<id>        -> update a user (bearer token required)
    DELETE /users/<id>        -> delete a user (bearer token required)
    GET    /echo              -> echoes the query string and selected headers
    POST   /echo              -> echoes the JSON body and selected headers

Each call to :func:`create_app` gets its own user store.
"""

import socket
import threading
import time
from datetime import datetime, timezone
from typing import Any

import requests
from flask import Flask, Response, jsonify, request

TOKEN_PREFIX = "stub-token-"
REJECTED_PASSWORD = "wrong"  # noqa: S105 (stub credential)

SEED_USERS: list[dict[str, Any]] = [
    {
        "id": 1,
        "name": "Alice",
        "email": "alice@example.com",
        "created_at": "2024-01-15T10:30:00Z",
        "manager": None,
        "tags": ["admin", "staff"],
    },
    {
        "id": 2,
        "name": "Bob",
        "email": "bob@example.com",
        "created_at": "2024-02-01T08:00:00+00:00",
        "manager": {"id": 1, "name": "Alice"},
        "tags": [],
    },
]


def _error(status_code: int, message: str) -> tuple[Response, int]:
    return jsonify({"error": message}), status_code


def create_app() -> Flask:
    """Create a stub API application with a fresh, seeded user store."""
    app = Flask(__name__)
    app.json.sort_keys = False  # type: ignore[attr-defined]

    users: dict[int, dict[str, Any]] = {
        user["id"]: dict(user) for user in SEED_USERS
    }

    def is_authorised() -> bool:
        header = request.headers.get("Authorization", "")
        return header.startswith(f"Bearer {TOKEN_PREFIX}")

    @app.get("/api/health")
    def health() -> Response:
        return jsonify({"status": "healthy"})

    @app.post("/api/login")
    def login() -> Response | tuple[Response, int]:
        data = request.get_json(silent=True) or {}
        username = data.get("username")
        if not username:
            return _error(400, "username is required")
        if data.get("password") == REJECTED_PASSWORD:
            return _error(401, "invalid credentials")

        return jsonify(
            {
                "token": f"{TOKEN_PREFIX}{username}",
                "user": {"username": username, "roles": ["tester"]},
            }
        )

    @app.get("/api/users")
    def list_users() -> Response:
        name = request.args.get("name")
        matches = [u for u in users.values() if name is None or u["name"] == name]
        return jsonify(matches)

    @app.post("/api/users")
    def create_user() -> Response | tuple[Response, int]:
        if not is_authorised():
            return _error(401, "missing bearer token")

        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data.get("name"):
            return _error(400, "name is required")

        user_id = max(users, default=0) + 1
        users[user_id] = {
            "id": user_id,
            "name": data["name"],
            "email": data.get("email"),
            "created_at": datetime.now(timezone.utc).isoformat(),
            "manager": data.get("manager"),
            "tags": data.get("tags", []),
        }
        return jsonify(users[user_id]), 201

    @app.get("/api/users/<int:user_id>")
    def get_user(user_id: int) -> Response | tuple[Response, int]:
        if user_id not in users:
            return _error(404, "user not found")
        return jsonify(users[user_id])

    @app.route("/api/users/<int:user_id>", methods=["PUT", "PATCH"])
    def update_user(user_id: int) -> Response | tuple[Response, int]:
        if not is_authorised():
            return _error(401, "missing bearer token")
        if user_id not in users:
            return _error(404, "user not found")

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _error(400, "body must be a JSON object")

        if request.method == "PUT":
            users[user_id] = {
                "id": user_id,
                "name": data.get("name"),
                "email": data.get("email"),
                "created_at": users[user_id]["created_at"],
                "manager": data.get("manager"),
                "tags": data.get("tags", []),
            }
        else:
            users[user_id].update({k: v for k, v in data.items() if k != "id"})

        return jsonify(users[user_id])

    @app.delete("/api/users/<int:user_id>")
    def delete_user(user_id: int) -> Response | tuple[Response, int]:
        if not is_authorised():
            return _error(401, "missing bearer token")
        if users.pop(user_id, None) is None:
            return _error(404, "user not found")
        return Response(status=204)

    @app.route("/api/echo", methods=["GET", "POST"])
    def echo() -> Response:
        return jsonify(
            {
                "method": request.method,
                "args": request.args.to_dict(flat=True),
                "body": request.get_json(silent=True),
                "authorization": request.headers.get("Authorization"),
                "content_type": request.headers.get("Content-Type"),
            }
        )

    return app


def start_stub_api() -> int:
    """Start a fresh stub API in a separate thread and return its port.

    The server runs in a daemon thread, which terminates when the process
    exits, so no explicit cleanup is needed.
    """
    # Use port 0 to let the OS assign a free port
    sock = socket.socket()
    sock.bind(("", 0))
    port = sock.getsockname()[1]
    sock.close()

    app = create_app()

    def run_app() -> None:
        app.run(port=port, debug=False, use_reloader=False)

    thread = threading.Thread(target=run_app, daemon=True)
    thread.start()

    # Wait for server to be ready by polling the health endpoint
    url = f"http://localhost:{port}/api/health"
    max_retries = 20
    retry_delay = 0.1

    for _ in range(max_retries):
        try:
            response = requests.get(url, timeout=1)
            if response.status_code == 200:
                break
        except requests.exceptions.RequestException:
            time.sleep(retry_delay)
    else:
        raise RuntimeError(f"Stub API failed to start on {url}")

    return port
