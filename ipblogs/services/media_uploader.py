import io
import logging
import uuid
from threading import Lock

from flask import current_app

from ipblogs.extensions.minio_client import create_minio_client


logger = logging.getLogger(__name__)

MEDIA_UPLOADER_KEY = "ipblogs.media_uploader"


class MediaUploadError(Exception):
    pass


def _extension_for_mimetype(mimetype: str) -> str:
    mapping = {
        "image/jpeg": "jpeg",
        "image/png": "png",
        "image/webp": "webp",
        "image/gif": "gif",
        "video/mp4": "mp4",
        "video/quicktime": "mov",
        "application/pdf": "pdf",
    }
    return mapping.get(mimetype, mimetype.split("/")[-1] or "bin")


class MinioMediaUploader:
    """Stores attachment bytes in a MinIO bucket and hands back a public URL.

    The client is built lazily so the app can start while the media host is
    down; the bucket is checked once per uploader.
    """

    def __init__(self, settings, client_factory=create_minio_client):
        self._settings = dict(settings)
        self._client_factory = client_factory
        self._client = None
        self._bucket_ready = False
        self._lock = Lock()

    @property
    def bucket(self):
        return self._settings["MINIO_BUCKET"]

    def _get_client(self):
        with self._lock:
            if self._client is None:
                self._client = self._client_factory(self._settings)

            if not self._bucket_ready:
                if not self._client.bucket_exists(self.bucket):
                    self._client.make_bucket(self.bucket)
                self._bucket_ready = True

            return self._client

    def build_url(self, object_name: str) -> str:
        base_url = self._settings["MINIO_PUBLIC_BASE_URL"].rstrip("/")
        return f"{base_url}/{self.bucket}/{object_name}"

    def upload(self, data: bytes, mimetype: str, filename: str | None = None) -> str:
        object_name = f"posts/{uuid.uuid4()}.{_extension_for_mimetype(mimetype)}"

        try:
            client = self._get_client()
            client.put_object(
                bucket_name=self.bucket,
                object_name=object_name,
                data=io.BytesIO(data),
                length=len(data),
                content_type=mimetype,
            )
        except Exception as e:
            logger.error("Upload of %r to bucket %s failed: %s", filename, self.bucket, e)
            raise MediaUploadError(f"Could not store {filename or object_name}") from e

        logger.info("Stored %r as %s (%d bytes)", filename, object_name, len(data))
        return self.build_url(object_name)


def get_media_uploader():
    return current_app.extensions[MEDIA_UPLOADER_KEY]
