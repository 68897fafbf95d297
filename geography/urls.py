"""
Geography — URL Configuration

@file geography/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import GeoEntityViewSet

app_name = 'geography'

router = DefaultRouter()
router.register('entities', GeoEntityViewSet, basename='entity')

urlpatterns = [
    path('', include(router.urls)),
]
