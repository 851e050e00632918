# vt_core/sites/selectors.py
from __future__ import annotations

from typing import Any, Mapping

from django.db.models import Prefetch, QuerySet

from vt_core.buildings.models import Building
from vt_core.common.errors import NotFoundError
from vt_core.common.filters import filter_queryset
from vt_core.common.ordering import apply_ordering
from vt_core.iam.scope import SiteScope
from vt_core.sites.filters import SiteFilter
from vt_core.sites.models import Site

SITE_ORDERING = {
    "name": "name",
    "city": "city",
    "state": "state",
    "is_active": "is_active",
    "created_at": "created_at",
}


def sites_for_scope(*, scope: SiteScope, params: Mapping[str, Any] | None = None) -> QuerySet[Site]:
    params = params or {}
    qs = scope.filter(Site.objects.all(), "id")
    qs = filter_queryset(SiteFilter, params, qs)
    return apply_ordering(qs, params.get("ordering"), SITE_ORDERING)


def site_by_id(*, scope: SiteScope, site_id: int) -> Site:
    site = scope.filter(Site.objects.all(), "id").filter(id=site_id).first()
    if site is None:
        raise NotFoundError("Site not found.")
    return site


def sites_with_buildings(*, scope: SiteScope, active_only: bool = False) -> QuerySet[Site]:
    """Sites in scope, each with its buildings prefetched (ordered by name)."""
    buildings = Building.objects.order_by("name", "id")
    qs = scope.filter(Site.objects.all(), "id")
    if active_only:
        qs = qs.filter(is_active=True)
        buildings = buildings.filter(is_active=True)
    return qs.prefetch_related(Prefetch("buildings", queryset=buildings)).order_by("name", "id")
