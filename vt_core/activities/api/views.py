# vt_core/activities/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.activities.api.serializers import (
    ActivityBatchRequestSerializer,
    ActivityCreateSerializer,
    ActivitySerializer,
    ActivityUpdateSerializer,
)
from vt_core.activities.models import Activity
from vt_core.activities.selectors import (
    activities_for_patient,
    activities_for_patients,
    activities_for_scope,
    activity_by_id,
)
from vt_core.activities.services import ActivityPatch, ActivityService
from vt_core.common.api.pagination import paginate
from vt_core.common.api.params import parse_id
from vt_core.common.permissions import ActivityPermission
from vt_core.iam.scope import scope_for_request


@extend_schema(tags=["Activities"])
class ActivityViewSet(viewsets.ViewSet):
    permission_classes = [ActivityPermission]

    serializer_class = ActivitySerializer
    queryset = Activity.objects.none()

    def list(self, request):
        qs = activities_for_scope(scope=scope_for_request(request), params=request.query_params)
        return paginate(request, qs, ActivitySerializer)

    def retrieve(self, request, pk=None):
        activity = activity_by_id(scope=scope_for_request(request), activity_id=parse_id(pk))
        return Response(ActivitySerializer(activity).data, status=status.HTTP_200_OK)

    @extend_schema(request=ActivityCreateSerializer, responses={201: ActivitySerializer})
    def create(self, request):
        s = ActivityCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        activity = ActivityService.create(
            scope=scope_for_request(request),
            actor_id=request.user.id,
            **s.validated_data,
        )
        return Response(ActivitySerializer(activity).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ActivityUpdateSerializer, responses={200: ActivitySerializer})
    def partial_update(self, request, pk=None):
        s = ActivityUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        activity = ActivityService.update(
            scope=scope_for_request(request),
            activity_id=parse_id(pk),
            patch=ActivityPatch.from_data(s.validated_data),
        )
        return Response(ActivitySerializer(activity).data, status=status.HTTP_200_OK)

    @extend_schema(request=ActivityUpdateSerializer, responses={200: ActivitySerializer})
    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        ActivityService.delete(scope=scope_for_request(request), activity_id=parse_id(pk))
        return Response({"detail": "Activity deleted."}, status=status.HTTP_200_OK)

    @extend_schema(responses={200: ActivitySerializer(many=True)})
    @action(detail=False, methods=["get"], url_path=r"patient/(?P<patient_id>[^/.]+)")
    def by_patient(self, request, patient_id=None):
        qs = activities_for_patient(scope=scope_for_request(request), patient_id=parse_id(patient_id, "patient_id"))
        return Response(ActivitySerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(request=ActivityBatchRequestSerializer, responses={200: OpenApiTypes.OBJECT})
    @action(detail=False, methods=["post"], url_path="batch")
    def batch(self, request):
        """Activities keyed by patient id; patients outside scope are omitted."""
        s = ActivityBatchRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        grouped = activities_for_patients(scope=scope_for_request(request), patient_ids=s.validated_data["patient_ids"])
        payload = {str(pid): ActivitySerializer(items, many=True).data for pid, items in grouped.items()}
        return Response(payload, status=status.HTTP_200_OK)
