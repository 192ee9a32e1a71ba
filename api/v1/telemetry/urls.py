"""
URL configuration for telemetry endpoints.
"""

from django.urls import path

from api.v1.telemetry import views

app_name = "telemetry"

urlpatterns = [
    path("session", views.RecordSessionView.as_view(), name="record-session"),
    path("plugin", views.RecordPluginUseView.as_view(), name="record-plugin-use"),
]
