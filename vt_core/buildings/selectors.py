# vt_core/buildings/selectors.py
from __future__ import annotations

from typing import Any, Mapping

from django.db.models import QuerySet

from vt_core.buildings.filters import BuildingFilter
from vt_core.buildings.models import Building
from vt_core.common.errors import NotFoundError
from vt_core.common.filters import filter_queryset
from vt_core.common.ordering import apply_ordering
from vt_core.iam.scope import SiteScope
from vt_core.sites.selectors import site_by_id

BUILDING_ORDERING = {
    "name": "name",
    "site_name": "site__name",
    "is_active": "is_active",
    "created_at": "created_at",
}


def _base_qs(scope: SiteScope) -> QuerySet[Building]:
    return scope.filter(Building.objects.select_related("site"), "site_id")


def buildings_for_scope(*, scope: SiteScope, params: Mapping[str, Any] | None = None) -> QuerySet[Building]:
    params = params or {}
    qs = filter_queryset(BuildingFilter, params, _base_qs(scope))
    return apply_ordering(qs, params.get("ordering"), BUILDING_ORDERING)


def building_by_id(*, scope: SiteScope, building_id: int) -> Building:
    building = _base_qs(scope).filter(id=building_id).first()
    if building is None:
        raise NotFoundError("Building not found.")
    return building


def buildings_for_site(*, scope: SiteScope, site_id: int) -> QuerySet[Building]:
    # 404 for a site outside scope, even if it exists
    site = site_by_id(scope=scope, site_id=site_id)
    return Building.objects.filter(site=site).select_related("site").order_by("name", "id")
