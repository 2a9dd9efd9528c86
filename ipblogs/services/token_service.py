from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from ipblogs.errors import InvalidToken


def issue_token(user_id: int, email: str) -> str:
    """Sign an access token carrying the user's id and email.

    Lifetime and secret come from JWT_ACCESS_TOKEN_EXPIRES and JWT_SECRET_KEY
    on the current app.
    """
    return create_access_token(
        identity=str(user_id),
        additional_claims={"id": user_id, "email": email},
    )


def claims_from_payload(decoded: dict) -> dict:
    if decoded.get("type") != "access":
        raise InvalidToken(detail="Not an access token")

    user_id = decoded.get("id")
    email = decoded.get("email")
    if not isinstance(user_id, int) or not isinstance(email, str):
        raise InvalidToken(detail="Token is missing identity claims")

    return {"id": user_id, "email": email}


def verify_token(token: str) -> dict:
    try:
        decoded = decode_token(token)
    except (PyJWTError, JWTExtendedException) as e:
        raise InvalidToken(detail=str(e)) from e

    return claims_from_payload(decoded)
