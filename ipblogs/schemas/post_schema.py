from marshmallow import EXCLUDE

from ipblogs.extensions.extensions import ma
from ipblogs.schemas.validators import not_blank


class PostFieldsSchema(ma.Schema):
    """Text fields shared by post creation (multipart) and update (JSON)."""

    class Meta:
        unknown = EXCLUDE

    title = ma.Str(required=True, validate=not_blank)
    description = ma.Str(required=True, validate=not_blank)
    content = ma.Str(required=True, validate=not_blank)


class AttachmentResponseSchema(ma.Schema):
    id = ma.Int()
    post_id = ma.Int()
    url = ma.Str()
    type = ma.Str()


class PostResponseSchema(ma.Schema):
    id = ma.Int()
    user_id = ma.Int()
    title = ma.Str()
    description = ma.Str()
    content = ma.Str()
    created_at = ma.DateTime()
    author_name = ma.Function(lambda post: post.author.name if post.author else None)
    attachments = ma.List(ma.Nested(AttachmentResponseSchema))


class PostRecordSchema(ma.Schema):
    id = ma.Int()
    user_id = ma.Int()
    title = ma.Str()
    description = ma.Str()
    content = ma.Str()
    created_at = ma.DateTime()
