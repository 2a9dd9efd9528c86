import logging
import traceback

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required
from sqlalchemy.exc import SQLAlchemyError

from ipblogs.db import db
from ipblogs.errors import BlogError
from ipblogs.middleware.auth import get_current_user
from ipblogs.services import post_service
from ipblogs.services.media_uploader import get_media_uploader


logger = logging.getLogger(__name__)

post_bp = Blueprint("posts", __name__)


def _error_response(msg, error, status_code):
    return jsonify({"msg": msg, "error": error}), status_code


@post_bp.route("/posts", methods=["GET"])
def list_posts():
    try:
        return jsonify(post_service.get_posts()), 200
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch posts")
        return _error_response("Failed to fetch posts", str(e), 500)


@post_bp.route("/posts/user/<int:user_id>", methods=["GET"])
def list_user_posts(user_id):
    try:
        return jsonify(post_service.get_posts_by_user(user_id)), 200
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch posts of user %s", user_id)
        return _error_response("Failed to fetch user posts", str(e), 500)


@post_bp.route("/posts/<int:post_id>", methods=["GET"])
def get_post(post_id):
    try:
        return jsonify(post_service.get_post(post_id)), 200
    except BlogError as e:
        return jsonify({"msg": e.message}), e.status_code
    except SQLAlchemyError as e:
        logger.exception("Failed to fetch post %s", post_id)
        return _error_response("Failed to fetch post", str(e), 500)


@post_bp.route("/posts", methods=["POST"])
@jwt_required()
def create_post():
    user_id = get_current_user()["id"]
    files = request.files.getlist("files") or request.files.getlist("files[]")

    try:
        post = post_service.create_post_with_attachments(
            user_id,
            request.form.get("title"),
            request.form.get("description"),
            request.form.get("content"),
            files,
            uploader=get_media_uploader(),
            engine=db.engine,
            max_files=current_app.config["MAX_ATTACHMENTS"],
            max_bytes=current_app.config["MAX_ATTACHMENT_BYTES"],
        )
        return jsonify(post), 201
    except BlogError as e:
        if e.status_code < 500:
            return jsonify({"msg": e.message, "error": e.detail}), e.status_code

        body = {"msg": "Post creation failed", "error": e.message}
        if current_app.config.get("EXPOSE_ERROR_DETAILS"):
            body["detail"] = e.detail
            body["stack"] = traceback.format_exc()
        return jsonify(body), e.status_code


@post_bp.route("/posts/<int:post_id>", methods=["PUT"])
@jwt_required()
def update_post(post_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"msg": "Invalid JSON body"}), 400

    try:
        post = post_service.update_post(
            post_id,
            get_current_user()["id"],
            data.get("title"),
            data.get("description"),
            data.get("content"),
        )
        return jsonify(post), 200
    except BlogError as e:
        if e.status_code >= 500:
            logger.error("Update of post %s failed: %s", post_id, e.detail)
        return _error_response(e.message, e.detail, e.status_code)
    except SQLAlchemyError as e:
        logger.exception("Update of post %s failed", post_id)
        return _error_response("Update failed", str(e), 500)


@post_bp.route("/posts/<int:post_id>", methods=["DELETE"])
@jwt_required()
def delete_post(post_id):
    try:
        post_service.delete_post(post_id, get_current_user()["id"])
        return jsonify({"msg": "Post deleted successfully"}), 200
    except BlogError as e:
        if e.status_code >= 500:
            logger.error("Delete of post %s failed: %s", post_id, e.detail)
            return _error_response(e.message, e.detail, e.status_code)
        return jsonify({"msg": e.message}), e.status_code
    except SQLAlchemyError as e:
        logger.exception("Delete of post %s failed", post_id)
        return _error_response("Delete failed", str(e), 500)
