"""
apps.content_types.models
~~~~~~~~~~~~~~~~~~~~~~~~~~
Models for the content-type registry.

Models
------
ContentTypeSchema
    A content type (GraphQL object type) and its ordered field definitions.
"""
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models

from .schema import ContentType

#: Content type ids are used verbatim as GraphQL type names.
_type_id_validator = RegexValidator(
    regex=r"^[_A-Za-z][_0-9A-Za-z]*$",
    message="type_id must be a valid GraphQL type name (letters, digits, underscores).",
    code="invalid_type_id",
)


class ContentTypeSchema(models.Model):
    """
    A content type registered for the admin interface.

    Fields
    ------
    type_id
        GraphQL type name, e.g. ``"Article"``.  Admin view fragments target
        it through their type condition.
    name
        Human-readable name shown in the admin navigation.
    category
        ``content``, ``user`` or ``setting``.
    fields
        JSONB list of field definitions validated by
        :class:`~apps.content_types.validators.ContentTypeValidator`.
    is_active
        Inactive content types get no admin views.
    """

    class Category(models.TextChoices):
        CONTENT = "content", "Content"
        USER = "user", "User"
        SETTING = "setting", "Setting"

    type_id = models.CharField(
        max_length=255,
        unique=True,
        validators=[_type_id_validator],
    )
    name = models.CharField(max_length=255)
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.CONTENT,
    )
    fields = models.JSONField(
        default=list,
        blank=True,
        help_text="Ordered list of field definitions stored as JSONB.",
    )
    description = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["category", "id"]
        verbose_name = "Content Type"
        verbose_name_plural = "Content Types"

    def __str__(self) -> str:
        return f"{self.type_id} [{self.category}]"

    def clean(self) -> None:
        """
        Validate ``fields`` and convert any
        :class:`~apps.content_types.validators.ContentTypeValidationError`
        into a :class:`django.core.exceptions.ValidationError`.
        """
        from apps.content_types.validators import (  # noqa: PLC0415
            ContentTypeValidationError,
            ContentTypeValidator,
        )

        try:
            ContentTypeValidator.validate(self.fields)
        except ContentTypeValidationError as exc:
            raise ValidationError(
                {"fields": [f"{err['field']}: {err['message']}" for err in exc.errors]}
            ) from exc

    def to_content_type(self) -> ContentType:
        return ContentType.from_definition(
            self.type_id,
            name=self.name,
            category=self.category,
            fields=self.fields,
        )
