# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, abort, jsonify
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.engine import Engine

from webclipper.infrastructure.health import check_database

ROBOTS_TXT = "User-agent: *\nDisallow: /\n"


class MiscController:
    def __init__(self, *, engine: Engine, metrics_enabled: bool = True) -> None:
        self._engine = engine
        self._metrics_enabled = metrics_enabled

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", endpoint="health", view_func=self.health, methods=["GET"])
        bp.add_url_rule(
            "/api/health", endpoint="api_health", view_func=self.health, methods=["GET"]
        )
        bp.add_url_rule("/robots.txt", view_func=self.robots, methods=["GET"])
        bp.add_url_rule("/api/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, int]:
        database_ok = check_database(self._engine)
        payload = {
            "status": "ok" if database_ok else "degraded",
            "database": "ok" if database_ok else "error",
        }
        return jsonify(payload), 200 if database_ok else 503

    def robots(self) -> Response:
        return Response(ROBOTS_TXT, mimetype="text/plain")

    def metrics(self) -> Response:
        if not self._metrics_enabled:
            abort(404)
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
