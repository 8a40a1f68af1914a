from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from flask import Flask, jsonify, request, session

from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError
from ..container import Container
from .model import Identity
from .session import SessionContext

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or request.form
        credential = payload.get("credential")

        try:
            if credential:
                identity = container.auth_service.identity_from_credential(credential)
            else:
                identity = container.auth_service.identity_from_profile(
                    payload.get("id"), payload.get("displayName")
                )
        except AuthenticationError as e:
            logger.info("Login failed: %s", e)
            return jsonify({"success": False, "message": str(e)}), 401

        session.clear()
        session.permanent = _as_bool(payload.get("remember_me"))
        app.permanent_session_lifetime = timedelta(
            days=int(app.config.get("SESSION_DAYS", DEFAULT_SESSION_DAYS))
        )
        session["user_id"] = identity.user_id
        session["name"] = identity.display_name

        context = container.session_service.login(SessionContext(), identity)
        return jsonify(
            {
                "success": True,
                "user": {"id": identity.user_id, "displayName": identity.display_name},
                "records": len(context.ledger),
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.session_service.logout(SessionContext(identity=session_identity(container)))
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", endpoint="me")
    def me():
        identity = session_identity(container)
        if identity is None:
            return jsonify({"authenticated": False})
        return jsonify(
            {
                "authenticated": True,
                "user": {"id": identity.user_id, "displayName": identity.display_name},
            }
        )


def session_identity(container: Container) -> Optional[Identity]:
    if "user_id" not in session:
        return None
    return container.auth_service.identity_from_profile(session["user_id"], session.get("name"))


def _as_bool(value) -> bool:
    # Form posts send strings such as "false" or "0".
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "on", "yes"}
    return bool(value)
