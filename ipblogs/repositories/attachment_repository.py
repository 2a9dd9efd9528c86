from sqlalchemy import insert, select

from ipblogs.models.attachment_model import Attachment


def insert_attachments(session, post_id, attachments):
    """Insert every (url, type) pair for a post in one multi-row INSERT."""
    if not attachments:
        return []

    rows = [
        {"post_id": post_id, "url": url, "type": attachment_type}
        for url, attachment_type in attachments
    ]
    session.execute(insert(Attachment.__table__).values(rows))

    return session.scalars(
        select(Attachment)
        .where(Attachment.post_id == post_id)
        .order_by(Attachment.id)
    ).all()
