# vt_core/iam/scope.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from django.db.models import Q, QuerySet

from vt_core.common.permissions import ROLE_ADMIN, user_role
from vt_core.iam.tokens import SiteClaimsUser


@dataclass(frozen=True)
class SiteScope:
    """
    The set of sites an identity may act upon.

    Either unrestricted (admins) or a finite set of site ids. Every selector
    and service takes one of these and applies it with `filter`, so there is
    a single code path for admins and non-admins.
    """
    site_ids: frozenset[int] = field(default_factory=frozenset)
    unrestricted: bool = False

    def allows(self, site_id: int | None) -> bool:
        if self.unrestricted:
            return True
        return site_id is not None and int(site_id) in self.site_ids

    def filter(self, qs: QuerySet, *fields: str) -> QuerySet:
        """
        Constrain `qs` to rows whose site (reached through any of `fields`)
        is in scope. Several fields are OR-ed, e.g. a user's primary site or
        one of their assigned sites.
        """
        if self.unrestricted:
            return qs
        if not self.site_ids:
            return qs.none()

        names = fields or ("site_id",)
        cond = Q()
        for name in names:
            cond |= Q(**{f"{name}__in": self.site_ids})

        qs = qs.filter(cond)
        if len(names) > 1:
            # OR across a to-many join (assigned sites) can duplicate rows
            qs = qs.distinct()
        return qs

    def as_dict(self) -> dict:
        return {"all_sites": self.unrestricted, "site_ids": sorted(self.site_ids)}


ALL_SITES = SiteScope(unrestricted=True)
NO_SITES = SiteScope()


def scope_for_claims(*, role: str | None, primary_site_id: int | None, assigned_site_ids: Iterable[int] = ()) -> SiteScope:
    """
    admin -> ALL_SITES
    anyone else -> {primary_site_id} U assigned_site_ids (primary is always in scope)
    """
    if role == ROLE_ADMIN:
        return ALL_SITES

    ids = {int(s) for s in assigned_site_ids or () if s is not None}
    if primary_site_id is not None:
        ids.add(int(primary_site_id))
    return SiteScope(site_ids=frozenset(ids))


def effective_scope(user) -> SiteScope:
    """
    Resolve the scope of either a token user (claims) or a Django user (profile).
    Unauthenticated identities get an empty scope.
    """
    role = user_role(user)
    if role is None:
        return NO_SITES
    if role == ROLE_ADMIN:
        return ALL_SITES

    # Token users carry the assignment as claims.
    if isinstance(user, SiteClaimsUser):
        return scope_for_claims(
            role=role,
            primary_site_id=user.primary_site_id,
            assigned_site_ids=user.assigned_site_ids,
        )

    profile = getattr(user, "vt_profile", None)
    if profile is None:
        return NO_SITES
    return scope_for_claims(
        role=role,
        primary_site_id=profile.primary_site_id,
        assigned_site_ids=profile.assigned_sites.values_list("id", flat=True),
    )


def scope_for_request(request) -> SiteScope:
    """Resolve once per request and cache it on the request."""
    cached = getattr(request, "site_scope", None)
    if cached is not None:
        return cached
    scope = effective_scope(getattr(request, "user", None))
    request.site_scope = scope
    return scope
