from sqlalchemy.orm import joinedload

from ipblogs.db import db
from ipblogs.models.post_model import Post


def _posts_with_attachments():
    return (
        Post.query
        .options(joinedload(Post.author), joinedload(Post.attachments))
        .order_by(Post.created_at.desc(), Post.id.desc())
    )


def get_all_posts():
    return _posts_with_attachments().all()


def get_posts_by_user_id(user_id: int):
    return _posts_with_attachments().filter(Post.user_id == user_id).all()


def get_post_by_id(post_id: int):
    return _posts_with_attachments().filter(Post.id == post_id).first()


def get_owned_post(post_id: int, user_id: int):
    return Post.query.filter_by(id=post_id, user_id=user_id).first()


def insert_post(session, user_id, title, description, content):
    post = Post(
        user_id=user_id,
        title=title,
        description=description,
        content=content,
    )
    session.add(post)
    session.flush()

    return post


def delete_post(post):
    db.session.delete(post)
    db.session.commit()
