"""
ISP Forms — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

admin.site.site_header = 'ISP Forms Administration'
admin.site.site_title = 'ISP Forms'
admin.site.index_title = 'Back-office reference data'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """ISP Forms API v1 — endpoint directory."""
    return Response({
        'auth': {
            'token': reverse('api-v1:token-obtain', request=request, format=format),
            'refresh': reverse('api-v1:token-refresh', request=request, format=format),
        },
        'geography': {
            'entities': reverse('api-v1:geography:entity-list', request=request, format=format),
            'options': reverse('api-v1:geography:entity-cascade-options', request=request, format=format),
        },
        'network': {
            'nodes': reverse('api-v1:network:node-list', request=request, format=format),
            'options': reverse('api-v1:network:node-cascade-options', request=request, format=format),
        },
        'service_orders': reverse('api-v1:service_orders:service-order-list', request=request, format=format),
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/token/', TokenObtainPairView.as_view(), name='token-obtain'),
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('geography/', include('geography.urls', namespace='geography')),
    path('network/', include('network.urls', namespace='network')),
    path('service-orders/', include('service_orders.urls', namespace='service_orders')),
    path('forms/', include('modal_forms.urls', namespace='modal_forms')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
