# Standard Library
import logging
import math

# Django
from django.utils import timezone

# Django REST Framework
from rest_framework.response import Response

# Local Imports
from .exceptions import SiteBackendError

logger = logging.getLogger(__name__)


def _parse_payload(request):
    """Consistent, tolerant request payload parsing."""
    data = request.data
    return data if hasattr(data, "get") else {}


def _now():
    return timezone.now()


def _as_bool(val, default=False):
    if val is None or val == "":
        return default
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in ("true", "1", "yes", "on"):
        return True
    if s in ("false", "0", "no", "off"):
        return False
    return default


def _as_list(val):
    """Coerce incoming field to list[str] safely."""
    if val is None:
        return []
    if isinstance(val, list):
        return [str(x).strip() for x in val if str(x).strip()]
    if isinstance(val, str):
        return [v.strip() for v in val.split(",") if v.strip()]
    return []


def _clean_str(val):
    v = (str(val) if val is not None else "").strip()
    return v or None


def _to_int(val, default=None):
    if val is None or isinstance(val, bool):
        return default
    try:
        return int(str(val).strip())
    except (TypeError, ValueError):
        return default


def _finite_number(val):
    """Return val as an int when it is a real finite number, else None."""
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        return None
    if not math.isfinite(val):
        return None
    return int(val)


def error_response(exc: SiteBackendError):
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.message, exc.details)
    return Response(exc.as_payload(), status=exc.status_code)
