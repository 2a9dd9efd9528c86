import logging

from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from ipblogs.db import db
from ipblogs.errors import InvalidCredentials, NotFound, PersistenceError, ValidationError
from ipblogs.repositories import user_repository
from ipblogs.schemas.auth_schema import LoginSchema, RegisterSchema, UserResponseSchema
from ipblogs.services.token_service import issue_token


logger = logging.getLogger(__name__)


def _load(schema, data):
    try:
        return schema.load(data)
    except SchemaValidationError as e:
        raise ValidationError(detail=e.messages) from e


def register(name, email, password):
    data = _load(RegisterSchema(), {"name": name, "email": email, "password": password})

    password_hash = generate_password_hash(data["password"])
    try:
        user = user_repository.create_user(
            name=data["name"].strip(),
            email=data["email"].strip(),
            password_hash=password_hash,
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.warning("Registration for %s failed: %s", data["email"], e)
        raise PersistenceError("Registration failed", detail=str(e)) from e

    logger.info("Registered user %s", user.id)
    return UserResponseSchema().dump(user)


def login(email, password):
    data = _load(LoginSchema(), {"email": email, "password": password})

    user = user_repository.get_by_email(data["email"].strip())
    if not user:
        raise NotFound("User not found")

    if not check_password_hash(user.password, data["password"]):
        raise InvalidCredentials()

    return {
        "token": issue_token(user.id, user.email),
        "user": {"id": user.id, "name": user.name},
    }
