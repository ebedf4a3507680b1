"""
common.health
~~~~~~~~~~~~~
GET /health/ – lightweight liveness + readiness probe.

Returns:
    200  {"status": "ok", "db": "ok", "admin_views": "ok"}
    200  {"status": "ok", "db": "ok", "admin_views": "defaults_only"}  – no active document
    503  {"status": "degraded", "db": "error: <msg>", "admin_views": "unknown"}
"""
import structlog
from django.db import connection, OperationalError
from django.http import JsonResponse

logger = structlog.get_logger(__name__)


def health_check(request):
    """Return service health including database and admin view document status."""
    from apps.admin_views.models import AdminViewDocument  # noqa: PLC0415

    db_status: str
    admin_views_status = "unknown"
    http_status: int

    try:
        connection.ensure_connection()
        db_status = "ok"
        http_status = 200
        has_document = AdminViewDocument.objects.filter(is_active=True).exists()
        admin_views_status = "ok" if has_document else "defaults_only"
    except OperationalError as exc:
        db_status = f"error: {exc}"
        http_status = 503
        logger.error("health_check_db_failure", error=str(exc))

    payload = {
        "status": "ok" if http_status == 200 else "degraded",
        "db": db_status,
        "admin_views": admin_views_status,
    }
    return JsonResponse(payload, status=http_status)
