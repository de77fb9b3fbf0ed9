# records/urls.py

from django.urls import path

from .views_ui import (
    experiment_detail,
    portal_sample_detail,
    reference_sample_detail,
    sample_detail,
)


app_name = "records"

urlpatterns = [
    # ============================================================
    # Console (back office)
    # ============================================================
    path("ui/samples/<int:pk>/", sample_detail, name="sample-detail-html"),
    path("ui/reference-samples/<int:pk>/", reference_sample_detail, name="reference-sample-detail-html"),
    path("ui/experiments/<int:pk>/", experiment_detail, name="experiment-detail-html"),
]

portal_urlpatterns = [
    # ============================================================
    # Self-service portal
    # ============================================================
    path("samples/<int:pk>/", portal_sample_detail, name="portal-sample-detail-html"),
]
