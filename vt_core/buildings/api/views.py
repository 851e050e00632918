# vt_core/buildings/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.buildings.api.serializers import (
    BuildingCreateSerializer,
    BuildingSerializer,
    BuildingUpdateSerializer,
)
from vt_core.buildings.models import Building
from vt_core.buildings.selectors import building_by_id, buildings_for_scope, buildings_for_site
from vt_core.buildings.services import BuildingPatch, BuildingService
from vt_core.common.api.pagination import paginate
from vt_core.common.api.params import parse_id
from vt_core.common.permissions import BuildingPermission
from vt_core.iam.scope import scope_for_request


@extend_schema(tags=["Buildings"])
class BuildingViewSet(viewsets.ViewSet):
    permission_classes = [BuildingPermission]

    serializer_class = BuildingSerializer
    queryset = Building.objects.none()

    def list(self, request):
        qs = buildings_for_scope(scope=scope_for_request(request), params=request.query_params)
        return paginate(request, qs, BuildingSerializer)

    def retrieve(self, request, pk=None):
        building = building_by_id(scope=scope_for_request(request), building_id=parse_id(pk))
        return Response(BuildingSerializer(building).data, status=status.HTTP_200_OK)

    @extend_schema(request=BuildingCreateSerializer, responses={201: BuildingSerializer})
    def create(self, request):
        s = BuildingCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        building = BuildingService.create(scope=scope_for_request(request), **s.validated_data)
        return Response(BuildingSerializer(building).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=BuildingUpdateSerializer, responses={200: BuildingSerializer})
    def partial_update(self, request, pk=None):
        s = BuildingUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        building = BuildingService.update(
            scope=scope_for_request(request),
            building_id=parse_id(pk),
            patch=BuildingPatch.from_data(s.validated_data),
        )
        return Response(BuildingSerializer(building).data, status=status.HTTP_200_OK)

    @extend_schema(request=BuildingUpdateSerializer, responses={200: BuildingSerializer})
    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        BuildingService.delete(scope=scope_for_request(request), building_id=parse_id(pk))
        return Response({"detail": "Building deleted."}, status=status.HTTP_200_OK)

    @extend_schema(responses={200: BuildingSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path=r"site/(?P<site_id>[^/.]+)")
    def by_site(self, request, site_id=None):
        qs = buildings_for_site(scope=scope_for_request(request), site_id=parse_id(site_id, "site_id"))
        return Response(BuildingSerializer(qs, many=True).data, status=status.HTTP_200_OK)
