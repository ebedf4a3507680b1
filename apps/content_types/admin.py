"""
apps.content_types.admin
~~~~~~~~~~~~~~~~~~~~~~~~~
Django admin registrations for the content-type registry.
"""
from django.contrib import admin

from .models import ContentTypeSchema


@admin.register(ContentTypeSchema)
class ContentTypeSchemaAdmin(admin.ModelAdmin):
    """Admin interface for registered content types."""

    list_display = ["type_id", "name", "category", "is_active", "updated_at"]
    list_filter = ["is_active", "category"]
    search_fields = ["type_id", "name"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["category", "type_id"]

    def get_readonly_fields(self, request, obj=None):
        """``type_id`` is referenced by admin view fragments; freeze it once saved."""
        if obj is not None:
            return list(self.readonly_fields) + ["type_id"]
        return self.readonly_fields
