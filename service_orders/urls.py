"""
Service Orders — URL Configuration

@file service_orders/urls.py
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import ServiceOrderViewSet

app_name = 'service_orders'

router = SimpleRouter()
router.register('', ServiceOrderViewSet, basename='service-order')

urlpatterns = [
    path('', include(router.urls)),
]
