"""
apps.admin_views.views
~~~~~~~~~~~~~~~~~~~~~~~
Thin DRF API views for the admin views application.
All business logic is delegated to
:mod:`apps.admin_views.services.view_service`.

Endpoints
---------
GET    /admin-views/                     – Build and list every admin view
GET    /admin-views/{view_id}/           – Build and return one admin view
POST   /admin-view-documents/            – Store (and activate) a fragment document
GET    /admin-view-documents/active/     – Return the active fragment document
"""
from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.admin_views.services import view_service
from .serializers import (
    AdminViewDocumentCreateSerializer,
    AdminViewDocumentSerializer,
    AdminViewSerializer,
)


class AdminViewListView(APIView):
    """GET /admin-views/ – every admin view, built on demand."""

    @extend_schema(
        summary="List Admin Views",
        description=(
            "Builds the admin views of the active fragment document plus a default "
            "view for every active content type no fragment targets."
        ),
        responses={
            200: AdminViewSerializer(many=True),
            422: OpenApiResponse(description="The stored fragments do not build."),
        },
        tags=["Admin Views"],
    )
    def get(self, request: Request) -> Response:
        views = view_service.build_admin_views()
        return Response(AdminViewSerializer(views, many=True).data)


class AdminViewDetailView(APIView):
    """GET /admin-views/{view_id}/ – a single admin view."""

    @extend_schema(
        summary="Get Admin View",
        responses={
            200: AdminViewSerializer,
            404: OpenApiResponse(description="No admin view with that id."),
            422: OpenApiResponse(description="The stored fragments do not build."),
        },
        tags=["Admin Views"],
    )
    def get(self, request: Request, view_id: str) -> Response:
        view = view_service.get_admin_view(view_id)
        return Response(AdminViewSerializer(view).data)


class AdminViewDocumentCreateView(APIView):
    """POST /admin-view-documents/ – store a new fragment document."""

    @extend_schema(
        summary="Create Admin View Document",
        request=AdminViewDocumentCreateSerializer,
        responses={
            201: AdminViewDocumentSerializer,
            422: OpenApiResponse(description="Invalid GraphQL or fragments that do not build."),
        },
        tags=["Admin Views"],
    )
    def post(self, request: Request) -> Response:
        serializer = AdminViewDocumentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vd = serializer.validated_data
        document = view_service.create_document(
            version=vd["version"],
            source=vd["source"],
            activate=vd["activate"],
        )
        return Response(
            AdminViewDocumentSerializer(document).data,
            status=status.HTTP_201_CREATED,
        )


class ActiveAdminViewDocumentView(APIView):
    """GET /admin-view-documents/active/ – the active fragment document."""

    @extend_schema(
        summary="Get Active Admin View Document",
        responses={
            200: AdminViewDocumentSerializer,
            404: OpenApiResponse(description="No document has been activated."),
        },
        tags=["Admin Views"],
    )
    def get(self, request: Request) -> Response:
        document = view_service.get_active_document()
        return Response(AdminViewDocumentSerializer(document).data)
