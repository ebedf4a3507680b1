"""
apps.admin_views.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the admin views API.
No business logic; shape validation only.

Built views are rendered with the camelCase keys the admin client expects.
"""
from rest_framework import serializers

from .models import AdminViewDocument


# ---------------------------------------------------------------------------
# Built admin views (read-only, from dataclasses)
# ---------------------------------------------------------------------------

class AdminViewFieldSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = serializers.CharField()
    fieldType = serializers.CharField(source="field_type")
    name = serializers.CharField()
    showInList = serializers.BooleanField(source="show_in_list")
    showInForm = serializers.BooleanField(source="show_in_form")
    listOf = serializers.BooleanField(source="list_of")
    nonNull = serializers.BooleanField(source="non_null")
    required = serializers.BooleanField()
    description = serializers.CharField(allow_null=True)
    directives = serializers.ListField(child=serializers.DictField())


class AdminViewSerializer(serializers.Serializer):
    id = serializers.CharField()
    returnType = serializers.CharField(source="return_type")
    category = serializers.CharField()
    type = serializers.CharField()
    name = serializers.CharField()
    titlePattern = serializers.CharField(source="title_pattern")
    icon = serializers.CharField(allow_null=True)
    permissions = serializers.JSONField()
    config = serializers.JSONField()
    groups = serializers.JSONField()
    fragment = serializers.CharField()
    fields = AdminViewFieldSerializer(many=True)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

class AdminViewDocumentSerializer(serializers.ModelSerializer):
    class Meta:
        model = AdminViewDocument
        fields = ["id", "version", "source", "is_active", "created_at", "updated_at"]
        read_only_fields = fields


class AdminViewDocumentCreateSerializer(serializers.Serializer):
    """Validates POST /admin-view-documents/ request body."""

    version = serializers.CharField(max_length=20)
    source = serializers.CharField()
    activate = serializers.BooleanField(default=True)
