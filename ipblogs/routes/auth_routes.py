import logging

from flask import Blueprint, jsonify, request

from ipblogs.errors import BlogError
from ipblogs.services import auth_service


logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"msg": "Invalid JSON body"}), 400

    try:
        user = auth_service.register(
            data.get("name"),
            data.get("email"),
            data.get("password"),
        )
        return jsonify(user), 201
    except BlogError as e:
        return jsonify({"msg": e.message, "error": e.detail}), e.status_code


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"msg": "Invalid JSON body"}), 400

    try:
        payload = auth_service.login(
            data.get("email"),
            data.get("password"),
        )
        return jsonify(payload), 200
    except BlogError as e:
        if e.status_code >= 500:
            logger.exception("Login failed")
        return jsonify({"msg": e.message}), e.status_code
