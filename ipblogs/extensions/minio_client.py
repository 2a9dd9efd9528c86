import urllib3
from minio import Minio


def create_minio_client(settings):
    timeout = urllib3.Timeout(
        connect=settings["MINIO_CONNECT_TIMEOUT"],
        read=settings["MINIO_READ_TIMEOUT"],
    )
    http_client = urllib3.PoolManager(
        timeout=timeout,
        retries=False,
        maxsize=settings.get("MINIO_HTTP_POOL_MAXSIZE", 32),
    )

    return Minio(
        settings["MINIO_ENDPOINT"],
        access_key=settings["MINIO_ACCESS_KEY"],
        secret_key=settings["MINIO_SECRET_KEY"],
        secure=settings["MINIO_SECURE"],
        http_client=http_client,
    )
