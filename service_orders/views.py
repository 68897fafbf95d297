"""
Service Orders — Views

@file service_orders/views.py
"""

from rest_framework import mixins, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from modal_forms.context import build_modal_context

from .models import ServiceOrder
from .serializers import ServiceOrderEditSerializer, ServiceOrderReadSerializer
from .services import ServiceOrderService


class ServiceOrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    List / retrieve / edit service orders. Edits go through the
    service-order rule set; a rejected form returns every failing field.
    """

    permission_classes = [IsAuthenticated]
    filterset_fields = ['support_status', 'lcpnap', 'repair_category']
    search_fields = ['account_no', 'full_name', 'assigned_email']
    ordering_fields = ['created_at', 'account_no', 'support_status']
    ordering = ['-created_at']

    def get_queryset(self):
        return ServiceOrder.objects.select_related(
            'lcpnap', 'region', 'city', 'barangay', 'location',
        )

    def get_serializer_class(self):
        if self.action in ('update', 'partial_update'):
            return ServiceOrderEditSerializer
        return ServiceOrderReadSerializer

    def update(self, request, *args, **kwargs):
        service_order = self.get_object()
        serializer = ServiceOrderEditSerializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        updated = ServiceOrderService.update_service_order(
            service_order_id=service_order.pk,
            context=build_modal_context(request.user, editing_record_id=service_order.pk),
            actor=request.user,
            **serializer.validated_data,
        )
        return Response(ServiceOrderReadSerializer(updated, context={'request': request}).data)
