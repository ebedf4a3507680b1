"""
apps.admin_views.models
~~~~~~~~~~~~~~~~~~~~~~~~
Models for the admin views application.

Models
------
AdminViewDocument
    Versioned GraphQL document holding the admin view fragments, with a
    partial unique constraint ensuring only one row is active at any time.

Built admin views are never stored: they are derived from the active
document and the content-type registry on demand.
"""
from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.db import models, transaction
from django.db.models import Q

#: Validator that enforces semantic versioning format ``MAJOR.MINOR.PATCH``.
_semver_validator = RegexValidator(
    regex=r"^\d+\.\d+\.\d+$",
    message=(
        'version must follow semantic versioning: "MAJOR.MINOR.PATCH" '
        "(e.g. 1.0.0, 2.3.14).  Only digits and dots are allowed."
    ),
    code="invalid_semver",
)


class AdminViewDocument(models.Model):
    """
    GraphQL source of the admin view fragments.

    At most **one** document may be active at a given time.  This is
    enforced at two levels:

    1. Database level – a partial :class:`~django.db.models.UniqueConstraint`
       on rows where ``is_active=True`` (named ``"unique_active_admin_view_document"``).
    2. Application level – :meth:`save` runs inside a ``SELECT FOR UPDATE``
       transaction that deactivates all other active rows first.

    Example ``source``::

        fragment Articles on Article @table(settings: {name: "Articles"}) {
            title
            ...ArticleMeta
        }
        fragment ArticleMeta on Article { created updated }
    """

    version = models.CharField(
        max_length=20,
        validators=[_semver_validator],
        help_text="Semantic version of this document (MAJOR.MINOR.PATCH).",
    )
    source = models.TextField(
        help_text="GraphQL document of fragment definitions. Parsed before every save.",
    )
    is_active = models.BooleanField(
        default=False,
        help_text="Only one document may be active at a time.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Admin View Document"
        verbose_name_plural = "Admin View Documents"
        constraints = [
            models.UniqueConstraint(
                fields=["is_active"],
                condition=Q(is_active=True),
                name="unique_active_admin_view_document",
                violation_error_message=(
                    "Another AdminViewDocument is already active. "
                    "Deactivate it before activating a new one."
                ),
            ),
        ]

    def __str__(self) -> str:
        status = "active" if self.is_active else "inactive"
        return f"AdminViewDocument v{self.version} [{status}]"

    def clean(self) -> None:
        """
        Reject sources that are not valid GraphQL or define no fragments.

        Raises:
            django.core.exceptions.ValidationError: With the parser message.
        """
        from graphql import GraphQLError, parse  # noqa: PLC0415
        from graphql.language import FragmentDefinitionNode  # noqa: PLC0415

        try:
            document = parse(self.source)
        except GraphQLError as exc:
            raise ValidationError({"source": [exc.message]}) from exc

        if not any(isinstance(d, FragmentDefinitionNode) for d in document.definitions):
            raise ValidationError(
                {"source": ["The document must define at least one fragment."]}
            )

    def validate_constraints(self, exclude=None) -> None:
        # save() deactivates the previously active row.
        super().validate_constraints(exclude={*(exclude or ()), "is_active"})

    def save(self, *args, **kwargs) -> None:
        """Persist the instance, deactivating every other active row first."""
        with transaction.atomic():
            if self.is_active:
                (
                    AdminViewDocument.objects
                    .select_for_update()
                    .filter(is_active=True)
                    .exclude(pk=self.pk)
                    .update(is_active=False)
                )
            super().save(*args, **kwargs)
