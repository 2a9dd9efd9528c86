from marshmallow import EXCLUDE, validate

from ipblogs.extensions.extensions import ma
from ipblogs.schemas.validators import not_blank


class RegisterSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = ma.Str(required=True, validate=not_blank)
    email = ma.Str(required=True, validate=[not_blank, validate.Length(max=255)])
    password = ma.Str(required=True, load_only=True, validate=validate.Length(min=1))


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = ma.Str(required=True, validate=not_blank)
    password = ma.Str(required=True, load_only=True, validate=validate.Length(min=1))


class UserResponseSchema(ma.Schema):
    id = ma.Int()
    name = ma.Str()
    email = ma.Str()
