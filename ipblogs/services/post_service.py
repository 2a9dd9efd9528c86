import logging

from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ipblogs.db import db
from ipblogs.errors import (
    Forbidden,
    NotFound,
    PayloadRejected,
    PersistenceError,
    UploadFailed,
    ValidationError,
)
from ipblogs.repositories import post_repository
from ipblogs.repositories.attachment_repository import insert_attachments
from ipblogs.schemas.post_schema import (
    AttachmentResponseSchema,
    PostFieldsSchema,
    PostRecordSchema,
    PostResponseSchema,
)


logger = logging.getLogger(__name__)

ALLOWED_MIME_PREFIXES = ("image/", "video/", "application/pdf")


def attachment_type_for(mimetype: str) -> str:
    if mimetype.startswith("image"):
        return "image"
    if mimetype.startswith("video"):
        return "video"
    return "pdf"


def _load_post_fields(title, description, content):
    try:
        return PostFieldsSchema().load({
            "title": title,
            "description": description,
            "content": content,
        })
    except SchemaValidationError as e:
        raise ValidationError(detail=e.messages) from e


def _get_stream_and_length(file_storage):
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return stream, length
    except Exception:
        try:
            stream.seek(0)
        except Exception:
            pass
        return stream, -1


def _read_attachments(files, max_files, max_bytes):
    """Validate every upload and return ``(data, mimetype, filename)`` tuples.

    Parts with no filename are what browsers send for an empty file input and
    are skipped.
    """
    files = [file for file in (files or []) if getattr(file, "filename", "")]
    if len(files) > max_files:
        raise PayloadRejected(f"Maximum {max_files} attachments allowed")

    validated_files = []
    for file in files:
        mimetype = getattr(file, "mimetype", None) or ""
        if not mimetype.startswith(ALLOWED_MIME_PREFIXES):
            raise PayloadRejected("Invalid file type", detail=mimetype or None)

        stream, length = _get_stream_and_length(file)
        if length > max_bytes:
            raise PayloadRejected("File too large", detail=file.filename)

        data = stream.read(max_bytes + 1)
        if len(data) > max_bytes:
            raise PayloadRejected("File too large", detail=file.filename)

        validated_files.append((data, mimetype, file.filename))

    return validated_files


def _upload_all(uploader, validated_files, post_id):
    uploaded = []
    for data, mimetype, filename in validated_files:
        logger.debug("Post %s: uploading %r (%s)", post_id, filename, mimetype)
        try:
            url = uploader.upload(data, mimetype, filename)
        except Exception as e:
            raise UploadFailed(detail=str(e)) from e
        uploaded.append((url, attachment_type_for(mimetype)))
    return uploaded


def create_post_with_attachments(
    user_id,
    title,
    description,
    content,
    files,
    *,
    uploader,
    engine,
    max_files,
    max_bytes,
):
    """Create a post and its attachments as one unit.

    Files are uploaded one after another while the post row is still
    uncommitted; any upload or insert failure rolls the post back. Objects
    already stored on the media host stay there.
    """
    fields = _load_post_fields(title, description, content)
    validated_files = _read_attachments(files, max_files, max_bytes)

    with Session(engine, expire_on_commit=False) as session:
        try:
            post = post_repository.insert_post(
                session,
                user_id=user_id,
                title=fields["title"],
                description=fields["description"],
                content=fields["content"],
            )
            logger.debug("Post %s: transaction open for user %s", post.id, user_id)

            uploaded = _upload_all(uploader, validated_files, post.id)
            attachments = insert_attachments(session, post.id, uploaded)

            session.commit()
        except UploadFailed as e:
            session.rollback()
            logger.error("Post creation rolled back after upload failure: %s", e.detail)
            raise
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Post creation rolled back after database error: %s", e)
            raise PersistenceError("Post creation failed", detail=str(e)) from e

        logger.info(
            "Post %s committed for user %s with %d attachment(s)",
            post.id, user_id, len(attachments),
        )

        result = PostRecordSchema().dump(post)
        result["attachments"] = AttachmentResponseSchema(many=True).dump(attachments)
        return result


def get_posts():
    return PostResponseSchema(many=True).dump(post_repository.get_all_posts())


def get_posts_by_user(user_id: int):
    return PostResponseSchema(many=True).dump(
        post_repository.get_posts_by_user_id(user_id)
    )


def get_post(post_id: int):
    post = post_repository.get_post_by_id(post_id)
    if not post:
        raise NotFound("Post not found")
    return PostResponseSchema().dump(post)


def update_post(post_id, user_id, title, description, content):
    fields = _load_post_fields(title, description, content)

    post = post_repository.get_owned_post(post_id, user_id)
    if not post:
        raise Forbidden()

    post.title = fields["title"]
    post.description = fields["description"]
    post.content = fields["content"]
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError("Update failed", detail=str(e)) from e

    return PostRecordSchema().dump(post)


def delete_post(post_id, user_id):
    post = post_repository.get_owned_post(post_id, user_id)
    if not post:
        raise Forbidden()

    try:
        post_repository.delete_post(post)
    except SQLAlchemyError as e:
        db.session.rollback()
        raise PersistenceError("Delete failed", detail=str(e)) from e

    logger.info("Post %s deleted by user %s", post_id, user_id)
