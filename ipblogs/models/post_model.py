from datetime import datetime, timezone

from ipblogs.db import db


def _utcnow():
    # Stored naive; SQLite drops the offset anyway.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Post(db.Model):
    __tablename__ = "posts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)

    author = db.relationship("User", back_populates="posts", lazy="joined")
    attachments = db.relationship(
        "Attachment",
        back_populates="post",
        lazy="select",
        order_by="Attachment.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
