# vt_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from vt_core.activities.api.views import ActivityViewSet
from vt_core.buildings.api.views import BuildingViewSet
from vt_core.iam.api.auth import LoginView, LogoutView
from vt_core.iam.api.me import MeView
from vt_core.iam.api.users import UserViewSet
from vt_core.medical_records.api.views import MedicalRecordViewSet
from vt_core.patients.api.views import PatientViewSet
from vt_core.sites.api.views import SiteViewSet

router = DefaultRouter()

# Reference data
router.register(r"sites", SiteViewSet, basename="sites")
router.register(r"buildings", BuildingViewSet, basename="buildings")
router.register(r"users", UserViewSet, basename="users")

# Care data
router.register(r"patients", PatientViewSet, basename="patients")
router.register(r"activities", ActivityViewSet, basename="activities")
router.register(r"medical-records", MedicalRecordViewSet, basename="medical-records")

urlpatterns = [
    # Auth + /me
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
