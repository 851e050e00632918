# vt_core/iam/api/users.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from vt_core.common.api.pagination import paginate
from vt_core.common.api.params import parse_id
from vt_core.common.permissions import UserPermission
from vt_core.iam.api.serializers import UserCreateSerializer, UserSerializer, UserUpdateSerializer
from vt_core.iam.scope import scope_for_request
from vt_core.iam.selectors import user_by_id, users_for_scope, users_for_site
from vt_core.iam.services.users import UserPatch, UserService


@extend_schema(tags=["Users"])
class UserViewSet(viewsets.ViewSet):
    """
    Staff accounts.
    - list / by_site: any role, limited to users sharing a site with the caller
    - everything else: admin only
    """

    permission_classes = [UserPermission]

    serializer_class = UserSerializer
    queryset = get_user_model().objects.none()

    def list(self, request):
        qs = users_for_scope(scope=scope_for_request(request), params=request.query_params)
        return paginate(request, qs, UserSerializer)

    def retrieve(self, request, pk=None):
        user = user_by_id(scope=scope_for_request(request), user_id=parse_id(pk))
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(request=UserCreateSerializer, responses={201: UserSerializer})
    def create(self, request):
        s = UserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        user = UserService.create(**s.validated_data)
        user = user_by_id(scope=scope_for_request(request), user_id=user.id)
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UserUpdateSerializer, responses={200: UserSerializer})
    def partial_update(self, request, pk=None):
        s = UserUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        user = UserService.update(
            scope=scope_for_request(request),
            user_id=parse_id(pk),
            patch=UserPatch.from_data(s.validated_data),
        )
        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(request=UserUpdateSerializer, responses={200: UserSerializer})
    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        UserService.delete(
            scope=scope_for_request(request),
            user_id=parse_id(pk),
            actor_user_id=request.user.id,
        )
        return Response({"detail": "User deleted."}, status=status.HTTP_200_OK)

    @extend_schema(responses={200: UserSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path=r"site/(?P<site_id>[^/.]+)")
    def by_site(self, request, site_id=None):
        qs = users_for_site(scope=scope_for_request(request), site_id=parse_id(site_id, "site_id"))
        return Response(UserSerializer(qs, many=True).data, status=status.HTTP_200_OK)
