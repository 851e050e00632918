# vt_core/medical_records/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.common.api.pagination import paginate
from vt_core.common.api.params import parse_id
from vt_core.common.permissions import MedicalRecordPermission
from vt_core.iam.scope import scope_for_request
from vt_core.medical_records.api.serializers import (
    MedicalRecordCreateSerializer,
    MedicalRecordSerializer,
    MedicalRecordUpdateSerializer,
)
from vt_core.medical_records.models import MedicalRecord
from vt_core.medical_records.selectors import (
    latest_medical_record,
    medical_record_by_id,
    medical_records_for_patient,
    medical_records_for_scope,
)
from vt_core.medical_records.services import MedicalRecordPatch, MedicalRecordService


@extend_schema(tags=["Medical Records"])
class MedicalRecordViewSet(viewsets.ViewSet):
    permission_classes = [MedicalRecordPermission]

    serializer_class = MedicalRecordSerializer
    queryset = MedicalRecord.objects.none()

    def list(self, request):
        qs = medical_records_for_scope(scope=scope_for_request(request), params=request.query_params)
        return paginate(request, qs, MedicalRecordSerializer)

    def retrieve(self, request, pk=None):
        record = medical_record_by_id(scope=scope_for_request(request), record_id=parse_id(pk))
        return Response(MedicalRecordSerializer(record).data, status=status.HTTP_200_OK)

    @extend_schema(request=MedicalRecordCreateSerializer, responses={201: MedicalRecordSerializer})
    def create(self, request):
        s = MedicalRecordCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        record = MedicalRecordService.create(scope=scope_for_request(request), **s.validated_data)
        return Response(MedicalRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=MedicalRecordUpdateSerializer, responses={200: MedicalRecordSerializer})
    def partial_update(self, request, pk=None):
        s = MedicalRecordUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        record = MedicalRecordService.update(
            scope=scope_for_request(request),
            record_id=parse_id(pk),
            patch=MedicalRecordPatch.from_data(s.validated_data),
        )
        return Response(MedicalRecordSerializer(record).data, status=status.HTTP_200_OK)

    @extend_schema(request=MedicalRecordUpdateSerializer, responses={200: MedicalRecordSerializer})
    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        MedicalRecordService.delete(scope=scope_for_request(request), record_id=parse_id(pk))
        return Response({"detail": "Medical record deleted."}, status=status.HTTP_200_OK)

    @extend_schema(responses={200: MedicalRecordSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path=r"patient/(?P<patient_id>[^/.]+)")
    def by_patient(self, request, patient_id=None):
        qs = medical_records_for_patient(
            scope=scope_for_request(request),
            patient_id=parse_id(patient_id, "patient_id"),
        )
        return Response(MedicalRecordSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(responses={200: MedicalRecordSerializer})
    @action(detail=False, methods=["get"], url_path=r"patient/(?P<patient_id>[^/.]+)/latest")
    def latest_for_patient(self, request, patient_id=None):
        record = latest_medical_record(scope=scope_for_request(request), patient_id=parse_id(patient_id, "patient_id"))
        return Response(MedicalRecordSerializer(record).data, status=status.HTTP_200_OK)
