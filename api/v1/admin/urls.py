"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

app_name = "license_admin"

urlpatterns = [
    path("licenses", views.LicensesView.as_view(), name="licenses"),
    path(
        "licenses/enabled",
        views.SetLicenseEnabledView.as_view(),
        name="set-license-enabled",
    ),
    path(
        "licenses/release-device",
        views.ReleaseDeviceView.as_view(),
        name="release-device",
    ),
    path(
        "licenses/<str:key>/activations",
        views.ActivationHistoryView.as_view(),
        name="activation-history",
    ),
]
