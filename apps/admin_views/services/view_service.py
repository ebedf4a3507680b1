"""
apps.admin_views.services.view_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
All business logic for serving admin views.

Views must call only these functions.  No business logic lives in views or
serializers.

Responsibilities
----------------
- Storing and activating :class:`~apps.admin_views.models.AdminViewDocument`.
- Building the admin views from the active document and the active content
  types via the process-wide
  :class:`~apps.admin_views.services.type_manager.AdminViewTypeManager`.
- Translating build failures into
  :class:`~common.exceptions.InvalidAdminViewError`.
"""
from __future__ import annotations

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from graphql import GraphQLError

from apps.admin_views.apps import get_type_manager
from apps.admin_views.models import AdminViewDocument
from apps.content_types.services import get_active_content_types
from common.exceptions import InvalidAdminViewError, NotFoundError, ValidationError

from .admin_view import AdminView
from .errors import AdminViewBuildError

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

def get_active_document() -> AdminViewDocument:
    """
    Return the active :class:`AdminViewDocument`.

    Raises:
        NotFoundError: When no document is active.
    """
    document = AdminViewDocument.objects.filter(is_active=True).first()
    if document is None:
        raise NotFoundError("No active AdminViewDocument found.")
    return document


def create_document(*, version: str, source: str, activate: bool = True) -> AdminViewDocument:
    """
    Validate and store a new document.

    The document must parse, and (when *activate* is set) every admin view
    it describes must build against the current content types; otherwise
    nothing is stored.

    Raises:
        ValidationError: Invalid version or GraphQL syntax.
        InvalidAdminViewError: The fragments do not build.
    """
    document = AdminViewDocument(version=version, source=source, is_active=activate)
    try:
        document.full_clean()
    except DjangoValidationError as exc:
        raise ValidationError(
            "Invalid admin view document.",
            errors=[
                {"field": field, "message": message}
                for field, messages in exc.message_dict.items()
                for message in messages
            ],
        ) from exc

    if activate:
        check_document(source)

    document.save()
    logger.info(
        "admin_view_document_created",
        document_id=document.pk,
        version=version,
        is_active=activate,
    )
    return document


# ---------------------------------------------------------------------------
# Admin views
# ---------------------------------------------------------------------------

def _build(source: str | None) -> list[AdminView]:
    try:
        return get_type_manager().build_admin_views(source, get_active_content_types())
    except GraphQLError as exc:
        logger.warning("admin_view_document_unparsable", error=exc.message)
        raise InvalidAdminViewError(exc.message) from exc
    except AdminViewBuildError as exc:
        logger.warning(
            "admin_view_build_failed",
            view_id=exc.view_id,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        raise InvalidAdminViewError(
            str(exc),
            errors=[{"field": exc.view_id or "", "message": str(exc)}],
        ) from exc


def check_document(source: str) -> list[AdminView]:
    """
    Build the views *source* describes against the active content types.

    Run before a document becomes active.

    Raises:
        InvalidAdminViewError: If *source* does not parse or a view fails
            to build.
    """
    return _build(source)


def build_admin_views() -> list[AdminView]:
    """
    Build every admin view.

    Uses the active document when there is one; otherwise only the default
    views of the active content types are built.

    Raises:
        InvalidAdminViewError: If any view fails to build.
    """
    document = AdminViewDocument.objects.filter(is_active=True).first()
    return _build(document.source if document else None)


def get_admin_view(view_id: str) -> AdminView:
    """
    Return a single admin view by id.

    Raises:
        NotFoundError: If no view has that id.
        InvalidAdminViewError: If the views fail to build.
    """
    for view in build_admin_views():
        if view.id == view_id:
            return view
    raise NotFoundError(f"Admin view '{view_id}' not found.")
