"""
apps.content_types.views
~~~~~~~~~~~~~~~~~~~~~~~~~
DRF views for content types – thin layer; all logic delegated to services.
"""
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .serializers import (
    ContentTypeCreateSerializer,
    ContentTypeSchemaSerializer,
    ContentTypeUpdateSerializer,
)


class ContentTypeListCreateView(APIView):
    """GET /api/v1/content-types/  –  POST /api/v1/content-types/"""

    @extend_schema(
        summary="List Content Types",
        responses={200: ContentTypeSchemaSerializer(many=True)},
        tags=["Content Types"],
    )
    def get(self, request: Request) -> Response:
        category = request.query_params.get("category")
        is_active_param = request.query_params.get("is_active")
        is_active = None
        if is_active_param is not None:
            is_active = is_active_param.lower() in ("1", "true", "yes")
        content_types = services.list_content_types(category=category, is_active=is_active)
        return Response(ContentTypeSchemaSerializer(content_types, many=True).data)

    @extend_schema(
        summary="Create Content Type",
        request=ContentTypeCreateSerializer,
        responses={
            201: ContentTypeSchemaSerializer,
            409: OpenApiResponse(description="A content type with that type_id already exists."),
            422: OpenApiResponse(description="Invalid field definitions."),
        },
        tags=["Content Types"],
    )
    def post(self, request: Request) -> Response:
        serializer = ContentTypeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vd = serializer.validated_data
        content_type = services.create_content_type(
            type_id=vd["type_id"],
            name=vd["name"],
            category=vd["category"],
            fields=vd.get("fields") or [],
            description=vd.get("description", ""),
        )
        return Response(
            ContentTypeSchemaSerializer(content_type).data,
            status=status.HTTP_201_CREATED,
        )


class ContentTypeDetailView(APIView):
    """GET / PATCH / DELETE /api/v1/content-types/<type_id>/"""

    @extend_schema(responses={200: ContentTypeSchemaSerializer}, tags=["Content Types"])
    def get(self, request: Request, type_id: str) -> Response:
        content_type = services.get_content_type(type_id)
        return Response(ContentTypeSchemaSerializer(content_type).data)

    @extend_schema(
        request=ContentTypeUpdateSerializer,
        responses={200: ContentTypeSchemaSerializer},
        tags=["Content Types"],
    )
    def patch(self, request: Request, type_id: str) -> Response:
        serializer = ContentTypeUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        content_type = services.update_content_type(type_id, data=serializer.validated_data)
        return Response(ContentTypeSchemaSerializer(content_type).data)

    @extend_schema(responses={204: None}, tags=["Content Types"])
    def delete(self, request: Request, type_id: str) -> Response:
        services.delete_content_type(type_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
