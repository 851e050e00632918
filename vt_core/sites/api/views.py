# vt_core/sites/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.common.api.pagination import paginate
from vt_core.common.api.params import parse_id
from vt_core.common.permissions import SitePermission
from vt_core.iam.scope import scope_for_request
from vt_core.sites.api.serializers import (
    SiteCreateSerializer,
    SiteSerializer,
    SiteUpdateSerializer,
    SiteWithBuildingsSerializer,
)
from vt_core.sites.models import Site
from vt_core.sites.selectors import site_by_id, sites_for_scope, sites_with_buildings
from vt_core.sites.services import SitePatch, SiteService


@extend_schema(tags=["Sites"])
class SiteViewSet(viewsets.ViewSet):
    permission_classes = [SitePermission]

    serializer_class = SiteSerializer
    queryset = Site.objects.none()

    def list(self, request):
        qs = sites_for_scope(scope=scope_for_request(request), params=request.query_params)
        return paginate(request, qs, SiteSerializer)

    def retrieve(self, request, pk=None):
        site = site_by_id(scope=scope_for_request(request), site_id=parse_id(pk))
        return Response(SiteSerializer(site).data, status=status.HTTP_200_OK)

    @extend_schema(request=SiteCreateSerializer, responses={201: SiteSerializer})
    def create(self, request):
        s = SiteCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        site = SiteService.create(**s.validated_data)
        return Response(SiteSerializer(site).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=SiteUpdateSerializer, responses={200: SiteSerializer})
    def partial_update(self, request, pk=None):
        s = SiteUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        site = SiteService.update(
            scope=scope_for_request(request),
            site_id=parse_id(pk),
            patch=SitePatch.from_data(s.validated_data),
        )
        return Response(SiteSerializer(site).data, status=status.HTTP_200_OK)

    @extend_schema(request=SiteUpdateSerializer, responses={200: SiteSerializer})
    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        SiteService.delete(scope=scope_for_request(request), site_id=parse_id(pk))
        return Response({"detail": "Site deleted."}, status=status.HTTP_200_OK)

    @extend_schema(responses={200: SiteWithBuildingsSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="sites-and-buildings")
    def sites_and_buildings(self, request):
        active_only = request.query_params.get("active_only", "0").strip().lower() in {"1", "true", "yes"}
        qs = sites_with_buildings(scope=scope_for_request(request), active_only=active_only)
        return Response(SiteWithBuildingsSerializer(qs, many=True).data, status=status.HTTP_200_OK)
