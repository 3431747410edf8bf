# Two-phase lifecycle for blob-backed records: the object and its row are
# created together and torn down together.
import logging
import re
import uuid
from dataclasses import dataclass
from urllib.parse import unquote

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Q

from .exceptions import (
    BlobStoreError,
    NotFound,
    UpstreamError,
    ValidationFailed,
)
from .models import (
    Bundle,
    BundleFile,
    BundleImage,
    DesignFile,
    DesignImage,
    HeroMediaItem,
    MediaAsset,
    PrintDesign,
)
from .storage import PUBLIC_MARKER, get_blob_store

logger = logging.getLogger(__name__)

_EXT_RE = re.compile(r"^[a-z0-9]{1,10}$")


@dataclass(frozen=True)
class AssetKind:
    """Where a record's object lives and which columns point at it."""
    name: str
    model: type
    bucket_setting: str
    url_field: str | None
    path_field: str = "storage_path"
    owner_field: str | None = None

    @property
    def bucket(self) -> str:
        return getattr(settings, self.bucket_setting)


MEDIA = AssetKind("media", MediaAsset, "MEDIA_BUCKET", "public_url")
BUNDLE_THUMB = AssetKind("bundle-thumb", Bundle, "BUNDLES_BUCKET", "thumb_url", "thumb_storage_path")
BUNDLE_IMAGE = AssetKind("bundle-image", BundleImage, "BUNDLES_BUCKET", "image_url", owner_field="bundle_id")
BUNDLE_FILE = AssetKind("bundle-file", BundleFile, "BUNDLES_BUCKET", "file_url", owner_field="bundle_id")
DESIGN_THUMB = AssetKind("design-thumb", PrintDesign, "PRINTS_BUCKET", "thumb_url", "thumb_storage_path")
DESIGN_IMAGE = AssetKind("design-image", DesignImage, "PRINTS_BUCKET", "image_url", owner_field="design_id")
DESIGN_FILE = AssetKind("design-file", DesignFile, "PRINTS_BUCKET", "file_url", owner_field="design_id")
HERO_ITEM = AssetKind("hero-item", HeroMediaItem, "HERO_MEDIA_BUCKET", None)

ASSET_KINDS = [
    MEDIA,
    BUNDLE_THUMB,
    BUNDLE_IMAGE,
    BUNDLE_FILE,
    DESIGN_THUMB,
    DESIGN_IMAGE,
    DESIGN_FILE,
    HERO_ITEM,
]


# --------------------------
# Paths and URLs
# --------------------------

def _extension(filename, default_ext):
    name = (filename or "").strip()
    if "." not in name:
        return default_ext
    ext = name.rsplit(".", 1)[1].lower()
    return ext if _EXT_RE.match(ext) else default_ext


def unique_storage_path(prefix: str, filename: str | None, default_ext: str = "bin") -> str:
    """``{prefix}/{uuid}.{ext}``; a fresh key on every call."""
    prefix = (prefix or "").strip("/")
    key = f"{uuid.uuid4()}.{_extension(filename, default_ext)}"
    return f"{prefix}/{key}" if prefix else key


def parse_public_url(url: str | None):
    """Return ``(bucket, path)`` for a blob-store public URL, else None."""
    if not url or PUBLIC_MARKER not in url:
        return None
    tail = url.split(PUBLIC_MARKER, 1)[1].split("?", 1)[0]
    bucket, _, path = tail.partition("/")
    if not bucket or not path:
        return None
    return bucket, unquote(path)


def storage_target(kind: AssetKind, row):
    """The stored path wins; a parsed public URL is the legacy fallback."""
    path = getattr(row, kind.path_field, None)
    if path:
        return kind.bucket, path
    if kind.url_field:
        return parse_public_url(getattr(row, kind.url_field, None))
    return None


def discard_objects(bucket: str, paths) -> bool:
    """Best-effort removal; failures are logged, never raised."""
    paths = [p for p in paths if p]
    if not paths:
        return True
    try:
        get_blob_store().remove(bucket, paths)
    except BlobStoreError as e:
        logger.warning("Storage cleanup failed for %s %s: %s", bucket, paths, e)
        return False
    return True


# --------------------------
# Create
# --------------------------

def create_asset(kind: AssetKind, upload, prefix: str, fields=None, default_ext="bin"):
    """
    Upload ``upload`` under a fresh key below ``prefix`` and insert the row.
    When the insert fails the uploaded object is removed before raising.
    """
    store = get_blob_store()
    bucket = kind.bucket
    path = unique_storage_path(prefix, getattr(upload, "name", None), default_ext)

    try:
        store.upload(bucket, path, upload)
    except BlobStoreError as e:
        raise UpstreamError("Upload failed", details=str(e)) from e

    values = dict(fields or {})
    values[kind.path_field] = path
    if kind.url_field:
        values[kind.url_field] = store.public_url(bucket, path)

    try:
        row = kind.model.objects.create(**values)
    except DatabaseError as e:
        logger.exception("Insert into %s failed; removing %s/%s", kind.model._meta.db_table, bucket, path)
        discard_objects(bucket, [path])
        raise UpstreamError("DB insert failed", details=str(e)) from e
    return row


# --------------------------
# Delete
# --------------------------

def resolve_asset(kind: AssetKind, asset_id=None, owner_id=None, url=None):
    """
    By id a missing row is NotFound. By natural key (owner + url) a missing
    row returns None so repeated deletes stay successful.
    """
    if asset_id:
        row = kind.model.objects.filter(pk=asset_id).first()
        if row is None:
            raise NotFound("Not found")
        return row
    if kind.owner_field and owner_id and url:
        return kind.model.objects.filter(
            **{kind.owner_field: owner_id, kind.url_field: url}
        ).first()
    raise ValidationFailed("Missing id (or owner id + url)")


def delete_asset(kind: AssetKind, row, row_first=False, fallback_path=None) -> bool:
    """
    Remove a row and its object. Storage removal is best-effort, the row
    delete is not. ``row_first`` deletes the row before touching storage.
    """
    if row is None:
        return False
    target = storage_target(kind, row)
    if target is None and fallback_path:
        target = (kind.bucket, fallback_path)

    if not row_first and target:
        discard_objects(target[0], [target[1]])
    try:
        kind.model.objects.filter(pk=row.pk).delete()
    except DatabaseError as e:
        raise UpstreamError("Delete failed", details=str(e)) from e
    if row_first and target:
        discard_objects(target[0], [target[1]])
    return True


def owned_storage_paths(kind: AssetKind, rows):
    """Group every object owned by ``rows`` by bucket."""
    grouped = {}
    for row in rows:
        target = storage_target(kind, row)
        if target:
            grouped.setdefault(target[0], set()).add(target[1])
    return grouped


# --------------------------
# Orphan reconciliation
# --------------------------

def referenced_paths(bucket: str) -> set:
    """Every path in ``bucket`` that some row still points at."""
    found = set()
    for kind in ASSET_KINDS:
        if kind.bucket == bucket:
            found.update(
                kind.model.objects.exclude(**{f"{kind.path_field}__isnull": True})
                .exclude(**{kind.path_field: ""})
                .values_list(kind.path_field, flat=True)
            )
        if kind.url_field:
            legacy = kind.model.objects.filter(
                Q(**{f"{kind.path_field}__isnull": True}) | Q(**{kind.path_field: ""})
            )
            for url in legacy.values_list(kind.url_field, flat=True):
                parsed = parse_public_url(url)
                if parsed and parsed[0] == bucket:
                    found.add(parsed[1])
    return found


def find_orphans(bucket: str):
    owned = referenced_paths(bucket)
    return [p for p in get_blob_store().list_paths(bucket) if p not in owned]


def asset_buckets():
    return sorted({kind.bucket for kind in ASSET_KINDS})
