"""
Object storage client - Supabase Storage REST API over HTTP.

Attachment bytes live in a bucket; the database only keeps the object key
(`file_path`). Failures surface as StorageError so callers decide whether to
compensate, log or fail the request.
"""

import logging
from urllib.parse import quote

import requests

from taskflow.core.config import settings

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30


class StorageError(Exception):
    pass


class StorageClient:
    def __init__(self, base_url: str, api_key: str, bucket: str, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket
        self.session = session or requests.Session()

    def _headers(self, extra: dict = None) -> dict:
        headers = {"Authorization": f"Bearer {self.api_key}", "apikey": self.api_key}
        if extra:
            headers.update(extra)
        return headers

    def _object_url(self, path: str, kind: str = "") -> str:
        kind = f"{kind}/" if kind else ""
        return f"{self.base_url}/object/{kind}{self.bucket}/{quote(path)}"

    def _check(self, response, action: str, path: str):
        if response.status_code >= 400:
            raise StorageError(f"{action} {path} failed: {response.status_code} {response.text}")
        return response

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        try:
            response = self.session.post(
                self._object_url(path),
                data=content,
                headers=self._headers({"Content-Type": content_type, "x-upsert": "false"}),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StorageError(f"upload {path} failed: {e}") from e
        self._check(response, "upload", path)

    def remove(self, paths: list) -> None:
        try:
            response = self.session.delete(
                f"{self.base_url}/object/{self.bucket}",
                json={"prefixes": paths},
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StorageError(f"remove {paths} failed: {e}") from e
        self._check(response, "remove", ",".join(paths))

    def download(self, path: str) -> bytes:
        try:
            response = self.session.get(
                self._object_url(path, "authenticated"),
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StorageError(f"download {path} failed: {e}") from e
        return self._check(response, "download", path).content

    def public_url(self, path: str) -> str:
        return self._object_url(path, "public")

    def create_signed_url(self, path: str, expires_in: int = 3600) -> str:
        try:
            response = self.session.post(
                self._object_url(path, "sign"),
                json={"expiresIn": expires_in},
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise StorageError(f"sign {path} failed: {e}") from e
        signed = self._check(response, "sign", path).json().get("signedURL")
        if not signed:
            raise StorageError(f"sign {path} failed: no signedURL in response")
        return f"{self.base_url}{signed}"


def get_storage() -> StorageClient:
    """FastAPI dependency; tests override it with a fake."""
    return StorageClient(settings.STORAGE_URL, settings.STORAGE_KEY, settings.STORAGE_BUCKET)
