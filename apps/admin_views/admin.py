"""
apps.admin_views.admin
~~~~~~~~~~~~~~~~~~~~~~~
Django admin registrations for the admin views application.
"""
from django import forms
from django.contrib import admin

from common.exceptions import InvalidAdminViewError

from .models import AdminViewDocument
from .services import view_service


class AdminViewDocumentForm(forms.ModelForm):
    """Refuses to activate a document whose views do not build."""

    class Meta:
        model = AdminViewDocument
        fields = ["version", "source", "is_active"]

    def clean(self):
        cleaned_data = super().clean()
        if not cleaned_data.get("is_active") or self.errors:
            return cleaned_data

        source = cleaned_data.get("source", self.instance.source)
        try:
            view_service.check_document(source)
        except InvalidAdminViewError as exc:
            messages = [e["message"] for e in exc.errors] or [exc.detail]
            raise forms.ValidationError(messages) from exc
        return cleaned_data


@admin.register(AdminViewDocument)
class AdminViewDocumentAdmin(admin.ModelAdmin):
    """
    Admin interface for AdminViewDocument.

    Activating a document deactivates all others (see
    :meth:`~apps.admin_views.models.AdminViewDocument.save`).
    """

    form = AdminViewDocumentForm
    list_display = ["version", "id", "is_active", "created_at"]
    list_filter = ["is_active"]
    search_fields = ["version"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["-created_at"]

    def get_readonly_fields(self, request, obj=None):
        """Stored sources are immutable; publish a new version instead."""
        if obj is not None:
            return list(self.readonly_fields) + ["version", "source"]
        return self.readonly_fields
