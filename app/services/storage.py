"""
Object storage for avatars, CVs, logos and banners.

Two backends share one interface: ``LocalStorage`` writes under
``UPLOAD_DIRECTORY`` (served by the app at ``/files``) and
``SupabaseStorage`` talks to the Supabase Storage REST API. Both upsert and
return the public URL of the stored object.
"""

import logging
import os
from typing import Optional

import requests

from app.core.config import settings
from app.core.errors import BadRequest, ProviderError

logger = logging.getLogger("satas.storage")

PROFILE_PICTURES_BUCKET = "profile-pictures"
COVER_PICTURES_BUCKET = "cover-pictures"
CV_BUCKET = "cvs"
LOGO_BUCKET = "logos"
BANNER_BUCKET = "banners"


def build_object_path(user_id: str, file_name: str) -> str:
    """Return ``<user_id>/<file_name>`` after stripping any directory parts."""
    name = os.path.basename((file_name or "").replace("\\", "/")).strip()
    if not name or name in (".", ".."):
        raise BadRequest("Invalid file name")
    return f"{user_id}/{name}"


class LocalStorage:
    """Filesystem-backed buckets under a root directory."""

    def __init__(self, root: str, public_url: str, buckets: list[str]):
        self.root = root
        self.public_url = public_url.rstrip("/")
        self.buckets = buckets

    def ensure_buckets(self) -> list[str]:
        created = []
        for bucket in self.buckets:
            bucket_dir = os.path.join(self.root, bucket)
            if not os.path.isdir(bucket_dir):
                os.makedirs(bucket_dir, exist_ok=True)
                created.append(bucket)
                logger.info("Created bucket: %s", bucket)
        return created

    def upload(self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        target = os.path.join(self.root, bucket, *path.split("/"))
        os.makedirs(os.path.dirname(target), exist_ok=True)

        with open(target, "wb") as buffer:
            buffer.write(data)

        logger.info("Stored %s/%s (%d bytes)", bucket, path, len(data))
        return f"{self.public_url}/{bucket}/{path}"


class SupabaseStorage:
    """Supabase Storage REST client using the service role key."""

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        buckets: list[str],
        file_size_limit: int,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_role_key = service_role_key
        self.buckets = buckets
        self.file_size_limit = file_size_limit
        self.timeout = timeout

    @property
    def _headers(self) -> dict:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }

    def ensure_buckets(self) -> list[str]:
        created = []
        for bucket in self.buckets:
            try:
                response = requests.get(
                    f"{self.base_url}/storage/v1/bucket/{bucket}",
                    headers=self._headers,
                    timeout=self.timeout,
                )
                if response.ok:
                    continue

                response = requests.post(
                    f"{self.base_url}/storage/v1/bucket",
                    headers=self._headers,
                    json={
                        "id": bucket,
                        "name": bucket,
                        "public": True,
                        "file_size_limit": self.file_size_limit,
                    },
                    timeout=self.timeout,
                )
                response.raise_for_status()
            except requests.RequestException as e:
                logger.error("Error creating bucket %s: %s", bucket, e)
                raise ProviderError(f"Failed to initialize bucket {bucket}") from e

            created.append(bucket)
            logger.info("Created bucket: %s", bucket)
        return created

    def upload(self, bucket: str, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        headers = {
            **self._headers,
            "Content-Type": content_type or "application/octet-stream",
            "Cache-Control": "3600",
            "x-upsert": "true",
        }
        try:
            response = requests.post(
                f"{self.base_url}/storage/v1/object/{bucket}/{path}",
                headers=headers,
                data=data,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Upload error for %s/%s: %s", bucket, path, e)
            raise ProviderError(f"Error uploading file: {e}") from e

        logger.info("Uploaded %s/%s (%d bytes)", bucket, path, len(data))
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"


def get_storage():
    """Dependency returning the configured storage backend."""
    if settings.STORAGE_BACKEND == "supabase":
        return SupabaseStorage(
            base_url=settings.SUPABASE_URL,
            service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            buckets=settings.storage_buckets,
            file_size_limit=settings.MAX_UPLOAD_BYTES,
            timeout=settings.IDENTITY_REQUEST_TIMEOUT,
        )
    return LocalStorage(
        root=settings.UPLOAD_DIRECTORY,
        public_url=settings.PUBLIC_FILES_URL,
        buckets=settings.storage_buckets,
    )
