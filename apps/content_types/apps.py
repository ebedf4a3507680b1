"""
apps.content_types.apps
"""
from django.apps import AppConfig


class ContentTypesConfig(AppConfig):
    name = "apps.content_types"
    label = "content_types"
    verbose_name = "Content Types"
