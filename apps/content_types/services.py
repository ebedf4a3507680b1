"""
apps.content_types.services
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Business logic for the content-type registry.
"""
from __future__ import annotations

import structlog
from django.db import IntegrityError

from common.exceptions import ConflictError, NotFoundError, ValidationError
from .models import ContentTypeSchema
from .schema import ContentType
from .validators import ContentTypeValidationError, ContentTypeValidator

logger = structlog.get_logger(__name__)


def _validate_fields(fields: list) -> None:
    try:
        ContentTypeValidator.validate(fields)
    except ContentTypeValidationError as exc:
        raise ValidationError(
            "Invalid content type field definitions.",
            errors=exc.errors,
        ) from exc


def list_content_types(
    *, category: str | None = None, is_active: bool | None = None
) -> list[ContentTypeSchema]:
    """Return all content types, optionally filtered by category and/or active status."""
    qs = ContentTypeSchema.objects.all()
    if category:
        qs = qs.filter(category=category)
    if is_active is not None:
        qs = qs.filter(is_active=is_active)
    return list(qs)


def get_active_content_types() -> list[ContentType]:
    """Return every active content type as a pure :class:`ContentType`."""
    return [ct.to_content_type() for ct in list_content_types(is_active=True)]


def get_content_type(type_id: str) -> ContentTypeSchema:
    """Fetch a content type by its GraphQL type name, raise NotFoundError if missing."""
    try:
        return ContentTypeSchema.objects.get(type_id=type_id)
    except ContentTypeSchema.DoesNotExist:
        raise NotFoundError(f"Content type '{type_id}' not found.")


def create_content_type(
    *,
    type_id: str,
    name: str,
    category: str = ContentTypeSchema.Category.CONTENT,
    fields: list | None = None,
    description: str = "",
) -> ContentTypeSchema:
    """Validate and create a content type."""
    fields = fields or []
    _validate_fields(fields)
    try:
        content_type = ContentTypeSchema.objects.create(
            type_id=type_id,
            name=name,
            category=category,
            fields=fields,
            description=description,
        )
    except IntegrityError as exc:
        raise ConflictError(f"Content type '{type_id}' already exists.") from exc

    logger.info(
        "content_type_created",
        type_id=type_id,
        category=category,
        field_count=len(fields),
    )
    return content_type


def update_content_type(type_id: str, *, data: dict) -> ContentTypeSchema:
    """Partial-update a content type (name, category, fields, description, is_active)."""
    content_type = get_content_type(type_id)
    if "fields" in data:
        _validate_fields(data["fields"])
    updatable_fields = {"name", "category", "fields", "description", "is_active"}
    for field, value in data.items():
        if field in updatable_fields:
            setattr(content_type, field, value)
    content_type.save()
    logger.info("content_type_updated", type_id=type_id)
    return content_type


def delete_content_type(type_id: str) -> None:
    """Soft-delete a content type."""
    content_type = get_content_type(type_id)
    content_type.is_active = False
    content_type.save(update_fields=["is_active", "updated_at"])
    logger.info("content_type_deactivated", type_id=type_id)
