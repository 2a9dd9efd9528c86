from marshmallow import ValidationError


def not_blank(value):
    if not value.strip():
        raise ValidationError("Must not be blank")
