import os
import tempfile
import unittest

from ipblogs import create_app
from ipblogs.db import db
from ipblogs.services import auth_service


class FakeUploader:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.calls = []

    def upload(self, data, mimetype, filename=None):
        self.calls.append((data, mimetype, filename))
        if self.fail_on is not None and len(self.calls) == self.fail_on:
            raise RuntimeError("media host unavailable")
        return f"https://media.example.test/ipblogs/posts/{len(self.calls)}-{filename}"


class ApiTestCase(unittest.TestCase):
    config_overrides = {}

    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        cls.uploader = FakeUploader()
        overrides = {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{cls.db_path}",
            "JWT_SECRET_KEY": "test-secret",
            "LOG_LEVEL": "WARNING",
        }
        overrides.update(cls.config_overrides)
        cls.app = create_app(overrides, media_uploader=cls.uploader)
        cls.client = cls.app.test_client()

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        with self.app.app_context():
            db.drop_all()
            db.create_all()
        self.uploader.calls.clear()
        self.uploader.fail_on = None

    def _register(self, name, email=None, password="pass123"):
        email = email or f"{name}@example.com"
        with self.app.app_context():
            return auth_service.register(name, email, password)

    def _auth_header(self, email, password="pass123"):
        with self.app.app_context():
            token = auth_service.login(email, password)["token"]
        return {"Authorization": f"Bearer {token}"}
