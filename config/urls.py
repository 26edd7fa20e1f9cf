"""URL configuration for the office booking project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the API schema and the application-level routers provided by Django Rest
Framework and each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    # API schema and docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    # Application URLs
    path('api/v1/', include('apps.offices.urls')),
    path('api/v1/', include('apps.reservations.urls')),
]
