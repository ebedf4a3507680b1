"""
apps.admin_views.urls
~~~~~~~~~~~~~~~~~~~~~~
URL routing for the admin views application.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import (
    ActiveAdminViewDocumentView,
    AdminViewDetailView,
    AdminViewDocumentCreateView,
    AdminViewListView,
)

urlpatterns = [
    path("admin-views/", AdminViewListView.as_view(), name="admin-view-list"),
    path("admin-views/<str:view_id>/", AdminViewDetailView.as_view(), name="admin-view-detail"),
    path(
        "admin-view-documents/",
        AdminViewDocumentCreateView.as_view(),
        name="admin-view-document-create",
    ),
    path(
        "admin-view-documents/active/",
        ActiveAdminViewDocumentView.as_view(),
        name="admin-view-document-active",
    ),
]
