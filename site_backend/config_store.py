# Reconciliation for configuration tables that hold a single logical row.
import logging

from django.db import transaction
from django.utils import timezone

from .exceptions import ValidationFailed

logger = logging.getLogger(__name__)

THEME_KINDS = ("gradient", "solid", "custom-gradient", "custom-solid")
SOLID_KINDS = ("solid", "custom-solid")


def current_row(model):
    """Reads always take the most recently updated row."""
    return model.objects.order_by("-updated_at").first()


def merge_singleton(model, fields: dict):
    """
    Update the latest row with only the fields given, or create the first
    row. Keys absent from ``fields`` keep their stored values.
    """
    now = timezone.now()
    with transaction.atomic():
        row = model.objects.select_for_update().order_by("-updated_at").first()
        if row is None:
            return model.objects.create(updated_at=now, **fields)
        for name, value in fields.items():
            setattr(row, name, value)
        row.updated_at = now
        row.save()
        return row


def replace_singleton(model, fields: dict):
    """Delete every row and insert a fresh one, atomically."""
    with transaction.atomic():
        model.objects.all().delete()
        return model.objects.create(**fields)


def upsert_keyed(model, key, fields: dict):
    obj, _ = model.objects.update_or_create(pk=key, defaults=fields)
    return obj


def clean_theme(data) -> dict:
    """Validate a theme payload and return model fields."""
    kind = data.get("kind")
    if not kind:
        raise ValidationFailed("Missing theme kind")
    if kind not in THEME_KINDS:
        raise ValidationFailed("Invalid theme kind")

    solid = data.get("solidColor") or None
    from_color = data.get("from") or None
    to_color = data.get("to") or None

    if kind in SOLID_KINDS and not solid:
        raise ValidationFailed("solidColor is required for solid/custom-solid kind")
    if kind not in SOLID_KINDS and (not from_color or not to_color):
        raise ValidationFailed("from and to are required for gradient kinds")

    return {
        "kind": kind,
        "solid_color": solid,
        "from_color": from_color,
        "to_color": to_color,
    }
