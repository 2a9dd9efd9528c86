from ipblogs.db import db


ATTACHMENT_TYPES = ("image", "video", "pdf")


class Attachment(db.Model):
    __tablename__ = "attachments"

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(
        db.Integer,
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url = db.Column(db.String(1024), nullable=False)
    type = db.Column(
        db.Enum(*ATTACHMENT_TYPES, name="attachment_type"),
        nullable=False,
    )

    post = db.relationship("Post", back_populates="attachments")
