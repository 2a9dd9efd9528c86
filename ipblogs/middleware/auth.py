import logging

from flask import jsonify, request
from flask_jwt_extended import get_jwt

from ipblogs.errors import InvalidToken, Unauthorized
from ipblogs.services.token_service import claims_from_payload


logger = logging.getLogger(__name__)


def _invalid_token_response(reason):
    logger.info("Rejected token on %s %s: %s", request.method, request.path, reason)
    return jsonify({"msg": InvalidToken.message}), InvalidToken.status_code


def register_token_handlers(jwt):
    """Map flask-jwt-extended failures onto 401 (no token) and 403 (bad token)."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"msg": Unauthorized.message}), Unauthorized.status_code

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return _invalid_token_response(reason)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return _invalid_token_response("Token has expired")

    @jwt.token_verification_loader
    def has_identity_claims(jwt_header, jwt_payload):
        try:
            claims_from_payload(jwt_payload)
        except InvalidToken:
            return False
        return True

    @jwt.token_verification_failed_loader
    def identity_claims_missing(jwt_header, jwt_payload):
        return _invalid_token_response("Token is missing identity claims")


def get_current_user():
    return claims_from_payload(get_jwt())
