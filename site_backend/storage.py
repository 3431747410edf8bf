# Filesystem-backed blob store: one FileSystemStorage per bucket.
import logging
import os

from django.conf import settings
from django.core.files.storage import FileSystemStorage

from .exceptions import BlobStoreError, ObjectExistsError

logger = logging.getLogger(__name__)

PUBLIC_MARKER = "/object/public/"


class BlobStore:
    """
    Bucketed object store with public URLs of the form
    ``{BLOB_PUBLIC_BASE_URL}/object/public/{bucket}/{path}``.
    Uploads never overwrite an existing object.
    """

    def __init__(self, root=None, public_base_url=None):
        self.root = root or settings.BLOB_ROOT
        self.public_base_url = (public_base_url or settings.BLOB_PUBLIC_BASE_URL).rstrip("/")

    def bucket(self, name: str) -> FileSystemStorage:
        return FileSystemStorage(
            location=os.path.join(self.root, name),
            base_url=f"{self.public_base_url}{PUBLIC_MARKER}{name}/",
        )

    def upload(self, bucket: str, path: str, content) -> str:
        storage = self.bucket(bucket)
        if storage.exists(path):
            raise ObjectExistsError(f"Object already exists: {bucket}/{path}")
        try:
            saved = storage.save(path, content)
        except OSError as e:
            raise BlobStoreError(f"Upload to {bucket}/{path} failed: {e}") from e
        if saved != path:
            # lost a race for the same key; never keep a renamed copy
            storage.delete(saved)
            raise ObjectExistsError(f"Object already exists: {bucket}/{path}")
        return saved

    def public_url(self, bucket: str, path: str) -> str:
        return self.bucket(bucket).url(path)

    def exists(self, bucket: str, path: str) -> bool:
        return self.bucket(bucket).exists(path)

    def remove(self, bucket: str, paths):
        storage = self.bucket(bucket)
        failed = []
        for path in paths:
            try:
                storage.delete(path)
            except OSError as e:
                failed.append(f"{path}: {e}")
        if failed:
            raise BlobStoreError(f"Could not remove from {bucket}: " + "; ".join(failed))

    def list_paths(self, bucket: str):
        storage = self.bucket(bucket)
        if not os.path.isdir(storage.location):
            return []
        found = []
        pending = [""]
        while pending:
            prefix = pending.pop()
            dirs, files = storage.listdir(prefix)
            for d in dirs:
                pending.append(f"{prefix}{d}/")
            for f in files:
                found.append(f"{prefix}{f}")
        return sorted(found)


def get_blob_store() -> BlobStore:
    return BlobStore()
