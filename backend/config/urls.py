"""URL configuration for the Evolutio IPD engine project."""
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path('api/ipd/', include('apps.ipd.urls')),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
]
