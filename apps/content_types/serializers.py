"""
apps.content_types.serializers
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
I/O serializers for content types – no business logic.
"""
from rest_framework import serializers

from .models import ContentTypeSchema


class ContentTypeSchemaSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContentTypeSchema
        fields = [
            "type_id",
            "name",
            "category",
            "fields",
            "description",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]


class ContentTypeCreateSerializer(serializers.Serializer):
    type_id = serializers.RegexField(r"^[_A-Za-z][_0-9A-Za-z]*$", max_length=255)
    name = serializers.CharField(max_length=255)
    category = serializers.ChoiceField(
        choices=ContentTypeSchema.Category.choices,
        default=ContentTypeSchema.Category.CONTENT,
    )
    fields = serializers.JSONField(required=False, default=list)
    description = serializers.CharField(required=False, default="", allow_blank=True)


class ContentTypeUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    category = serializers.ChoiceField(
        choices=ContentTypeSchema.Category.choices,
        required=False,
    )
    fields = serializers.JSONField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
