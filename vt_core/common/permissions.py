# vt_core/common/permissions.py

from __future__ import annotations

from rest_framework.permissions import BasePermission, SAFE_METHODS

# Role names (stored on UserProfile.role and carried in the token `role` claim)
ROLE_ADMIN = "admin"
ROLE_NURSE = "nurse"
ROLE_PHARMACIST = "pharmacist"

ALL_ROLES = frozenset({ROLE_ADMIN, ROLE_NURSE, ROLE_PHARMACIST})
ADMIN_ONLY = frozenset({ROLE_ADMIN})


def user_role(user) -> str | None:
    """
    Resolve the role of the current identity.

    - Token users (the normal API path) carry the role as a claim.
    - Django users (admin site, management commands, tests) read it from the profile.
    - Superusers are treated as admin.
    """
    if not user or not getattr(user, "is_authenticated", False):
        return None

    if getattr(user, "is_superuser", False):
        return ROLE_ADMIN

    role = getattr(user, "role", None)
    if role:
        return str(role)

    profile = getattr(user, "vt_profile", None)
    if profile is not None:
        return profile.role
    return None


def is_admin(user) -> bool:
    return user_role(user) == ROLE_ADMIN


class BaseRolePermission(BasePermission):
    """
    Base permission class for role-based access control.

    Key behavior:
    - Requires an authenticated identity with a known role.
    - ADMIN bypass.
    - Uses allowed_roles_per_action for strict RBAC.
    - If action is unknown and request is SAFE, fall back to list/retrieve
      instead of denying (covers @action endpoints missing from the map).

    Row visibility (which sites) is NOT decided here; selectors/services apply
    the caller's SiteScope and answer 404 for rows outside it.
    """
    message = "You do not have permission to perform this action."

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "create": ADMIN_ONLY,
        "update": ADMIN_ONLY,
        "partial_update": ADMIN_ONLY,
        "destroy": ADMIN_ONLY,
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        # fallback inference when action isn't set
        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        role = user_role(user)
        if role is None:
            return False

        # ADMIN can do everything
        if role == ROLE_ADMIN:
            return True

        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            is_detail = "pk" in kwargs or "id" in kwargs
            read_action = "retrieve" if is_detail else "list"
            allowed = self.allowed_roles_per_action.get(read_action)

        if allowed is not None:
            return role in allowed

        # Unknown action => deny by default
        return False

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)


# Specific permission classes for each module

class SitePermission(BaseRolePermission):
    """Reference data: everyone reads (within scope), admins write."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "sites_and_buildings": ALL_ROLES,
        "create": ADMIN_ONLY,
        "update": ADMIN_ONLY,
        "partial_update": ADMIN_ONLY,
        "destroy": ADMIN_ONLY,
    }


class BuildingPermission(BaseRolePermission):
    """Reference data: everyone reads (within scope), admins write."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "by_site": ALL_ROLES,
        "create": ADMIN_ONLY,
        "update": ADMIN_ONLY,
        "partial_update": ADMIN_ONLY,
        "destroy": ADMIN_ONLY,
    }


class UserPermission(BaseRolePermission):
    """Staff directory is readable in scope; account management is admin-only."""
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "by_site": ALL_ROLES,
        "retrieve": ADMIN_ONLY,
        "create": ADMIN_ONLY,
        "update": ADMIN_ONLY,
        "partial_update": ADMIN_ONLY,
        "destroy": ADMIN_ONLY,
    }


class PatientPermission(BaseRolePermission):
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "by_site": ALL_ROLES,
        "create": ALL_ROLES,
        "update": ALL_ROLES,
        "partial_update": ALL_ROLES,
        "destroy": ALL_ROLES,
    }


class ActivityPermission(BaseRolePermission):
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "by_patient": ALL_ROLES,
        "batch": ALL_ROLES,
        "create": ALL_ROLES,
        "update": ALL_ROLES,
        "partial_update": ALL_ROLES,
        "destroy": ALL_ROLES,
    }


class MedicalRecordPermission(BaseRolePermission):
    allowed_roles_per_action = {
        "list": ALL_ROLES,
        "retrieve": ALL_ROLES,
        "by_patient": ALL_ROLES,
        "latest_for_patient": ALL_ROLES,
        "create": ALL_ROLES,
        "update": ALL_ROLES,
        "partial_update": ALL_ROLES,
        "destroy": ALL_ROLES,
    }
