# vt_core/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from vt_core.common.permissions import user_role
from vt_core.iam.api.serializers import MeResponseSerializer
from vt_core.iam.scope import scope_for_request


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: MeResponseSerializer}, tags=["IAM"])
    def get(self, request):
        """
        Returns the claims of the current identity plus its resolved site scope.
        """
        user = request.user
        return Response(
            {
                "user": {
                    "id": user.id,
                    "email": getattr(user, "email", "") or "",
                    "name": getattr(user, "name", "") or "",
                    "role": user_role(user),
                    "primary_site_id": getattr(user, "primary_site_id", None),
                    "assigned_site_ids": list(getattr(user, "assigned_site_ids", ()) or ()),
                },
                "scope": scope_for_request(request).as_dict(),
            },
            status=status.HTTP_200_OK,
        )
