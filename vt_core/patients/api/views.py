# vt_core/patients/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.common.api.pagination import paginate
from vt_core.common.api.params import parse_id
from vt_core.common.permissions import PatientPermission
from vt_core.iam.scope import scope_for_request
from vt_core.patients.api.serializers import (
    PatientCreateSerializer,
    PatientSerializer,
    PatientUpdateSerializer,
)
from vt_core.patients.models import Patient
from vt_core.patients.selectors import patient_by_id, patients_for_scope, patients_for_site
from vt_core.patients.services import PatientPatch, PatientService


@extend_schema(tags=["Patients"])
class PatientViewSet(viewsets.ViewSet):
    permission_classes = [PatientPermission]

    serializer_class = PatientSerializer
    queryset = Patient.objects.none()

    def list(self, request):
        qs = patients_for_scope(scope=scope_for_request(request), params=request.query_params)
        return paginate(request, qs, PatientSerializer)

    def retrieve(self, request, pk=None):
        patient = patient_by_id(scope=scope_for_request(request), patient_id=parse_id(pk))
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(request=PatientCreateSerializer, responses={201: PatientSerializer})
    def create(self, request):
        s = PatientCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        patient = PatientService.create(scope=scope_for_request(request), **s.validated_data)
        return Response(PatientSerializer(patient).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PatientUpdateSerializer, responses={200: PatientSerializer})
    def partial_update(self, request, pk=None):
        s = PatientUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        patient = PatientService.update(
            scope=scope_for_request(request),
            patient_id=parse_id(pk),
            patch=PatientPatch.from_data(s.validated_data),
        )
        return Response(PatientSerializer(patient).data, status=status.HTTP_200_OK)

    @extend_schema(request=PatientUpdateSerializer, responses={200: PatientSerializer})
    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        PatientService.delete(scope=scope_for_request(request), patient_id=parse_id(pk))
        return Response({"detail": "Patient deleted."}, status=status.HTTP_200_OK)

    @extend_schema(responses={200: PatientSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path=r"site/(?P<site_id>[^/.]+)")
    def by_site(self, request, site_id=None):
        qs = patients_for_site(scope=scope_for_request(request), site_id=parse_id(site_id, "site_id"))
        return Response(PatientSerializer(qs, many=True).data, status=status.HTTP_200_OK)
