from ipblogs.db import db
from ipblogs.models.user_model import User


def get_by_email(email: str):
    return User.query.filter_by(email=email).first()


def create_user(name, email, password_hash):
    user = User(
        name=name,
        email=email,
        password=password_hash,
    )
    db.session.add(user)
    db.session.commit()
    return user
