"""
URL configuration for client license endpoints.
"""

from django.urls import path

from api.v1.licenses import views

app_name = "licenses"

urlpatterns = [
    path("activate", views.ActivateLicenseView.as_view(), name="activate-license"),
    path("verify", views.VerifyLicenseView.as_view(), name="verify-license"),
    path("access", views.CheckAccessView.as_view(), name="check-access"),
]
