from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        """Unauthenticated database check for deployment probes."""
        try:
            container.ping_database()
        except Exception as e:
            logger.error("Health check failed: %s", e)
            return jsonify({"ok": False, "database": "failed", "error": str(e)}), 503
        return jsonify({"ok": True, "database": "ok"}), 200
