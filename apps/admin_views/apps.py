"""
apps.admin_views.apps
~~~~~~~~~~~~~~~~~~~~~~
Registers the admin view types listed in ``settings.ADMIN_VIEW_TYPES``.
"""
from django.apps import AppConfig, apps
from django.conf import settings
from django.utils.module_loading import import_string

from .services.type_manager import AdminViewTypeManager


class AdminViewsConfig(AppConfig):
    name = "apps.admin_views"
    label = "admin_views"
    verbose_name = "Admin Views"

    type_manager: AdminViewTypeManager | None = None

    def ready(self) -> None:
        self.type_manager = AdminViewTypeManager(
            import_string(path)() for path in settings.ADMIN_VIEW_TYPES
        )


def get_type_manager() -> AdminViewTypeManager:
    """Return the process-wide manager built from ``settings.ADMIN_VIEW_TYPES``."""
    return apps.get_app_config(AdminViewsConfig.label).type_manager
