# lifecycle_peek/urls.py

from django.urls import path

from .views import EligibleClassesView, LifecycleDiagramView


app_name = "lifecycle_peek"

urlpatterns = [
    path("endpoint/", LifecycleDiagramView.as_view(), name="endpoint"),
    path("classes/", EligibleClassesView.as_view(), name="eligible-classes"),
]
