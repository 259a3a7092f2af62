from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.http import json_error, request_payload, user_json
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, StorageError, ValidationError
from .guards import login_required

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.errorhandler(StorageError)
    def storage_unavailable(e: StorageError):
        logger.error("Record store failure: %s", e)
        return json_error("Não foi possível salvar. Tente novamente mais tarde.", 503)

    @app.route("/api/auth/register", methods=["POST"], endpoint="register")
    def register_driver():
        data = request_payload()
        try:
            user = container.auth_service.register_user(
                data.get("name", ""),
                data.get("username", ""),
                data.get("password", ""),
            )
        except ValidationError as e:
            return json_error(str(e), 400)

        return jsonify({"success": True, "user": user_json(user)}), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request_payload()
        try:
            role = Role(str(data.get("role") or Role.DRIVER.value).upper())
        except ValueError:
            return json_error("Perfil inválido.", 400)

        try:
            s_user = container.auth_service.login(data.get("username", ""), data.get("password", ""), role)
        except AuthenticationError as e:
            return json_error(str(e), 401)

        session.clear()
        session.update(s_user.to_session())
        return jsonify({"success": True, "user": s_user.to_session()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    def me(current_user):
        return jsonify({"success": True, "user": current_user.to_session()})
