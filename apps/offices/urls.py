"""URL routing for the offices domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import OfficeImageViewSet, OfficeViewSet, TagListView

router = DefaultRouter()
router.register(r"offices", OfficeViewSet, basename="office")

image_list = OfficeImageViewSet.as_view({"post": "create"})
image_detail = OfficeImageViewSet.as_view({"delete": "destroy"})

urlpatterns = [
    path("", include(router.urls)),
    path("tags/", TagListView.as_view(), name="tag-list"),
    path("offices/<int:office_id>/images/", image_list, name="office-image-list"),
    path("offices/<int:office_id>/images/<int:pk>/", image_detail, name="office-image-detail"),
]
