"""
apps.content_types.urls
"""
from django.urls import path

from .views import ContentTypeDetailView, ContentTypeListCreateView

urlpatterns = [
    path("content-types/", ContentTypeListCreateView.as_view(), name="content-type-list-create"),
    path("content-types/<str:type_id>/", ContentTypeDetailView.as_view(), name="content-type-detail"),
]
