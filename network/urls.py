"""
Network — URL Configuration

@file network/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import LcpNapNodeViewSet

app_name = 'network'

router = DefaultRouter()
router.register('nodes', LcpNapNodeViewSet, basename='node')

urlpatterns = [
    path('', include(router.urls)),
]
