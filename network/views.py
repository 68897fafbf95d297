"""
Network — Views

LCP-NAP node CRUD and the port picker endpoints. Listing ports for a
node while editing a service order passes that order's id so its own
port stays selectable.

@file network/views.py
"""

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from modal_forms.context import build_modal_context

from .models import LcpNapNode
from .permissions import CanManageNetwork
from .serializers import (
    LcpNapNodeReadSerializer,
    LcpNapNodeWriteSerializer,
    PortCascadeQuerySerializer,
    PortQuerySerializer,
    PortSlotSerializer,
    serialize_option,
)
from .services import NetworkService, PortAllocationService


class LcpNapNodeViewSet(viewsets.ModelViewSet):
    """
    List/retrieve: authenticated.
    Create/update/delete: staff.
    """

    permission_classes = [IsAuthenticated, CanManageNetwork]
    filterset_fields = ['lcp_name', 'port_total', 'location']
    search_fields = ['name', 'lcp_name', 'nap_name']
    ordering_fields = ['name', 'lcp_name', 'created_at']
    ordering = ['lcp_name', 'nap_name']
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        return LcpNapNode.objects.select_related('location__parent__parent__parent')

    def get_serializer_class(self):
        if self.action == 'create':
            return LcpNapNodeWriteSerializer
        return LcpNapNodeReadSerializer

    def create(self, request, *args, **kwargs):
        serializer = LcpNapNodeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        node = NetworkService.create_node(
            context=build_modal_context(request.user),
            actor=request.user,
            **serializer.validated_data,
        )
        return Response(
            LcpNapNodeReadSerializer(node, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=['get'], url_path='ports')
    def ports(self, request, pk=None):
        """Free ports of this node, e.g. ``?current_service_order=12``."""
        query = PortQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        node = self.get_object()
        slots = PortAllocationService.available_ports(
            node.pk,
            current_service_order_id=query.validated_data['current_service_order'],
        )
        return Response({
            'success': True,
            'data': PortSlotSerializer(slots, many=True).data,
            'port_total': node.port_total,
        })

    @action(detail=False, methods=['get'], url_path='options')
    def cascade_options(self, request):
        """LCP → NAP → Port picker contents, e.g. ``?lcp=LCP-01&nap=3``."""
        query = PortCascadeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        context = build_modal_context(
            request.user, editing_record_id=data['current_service_order'],
        )
        result = PortAllocationService.cascade_options(
            {'lcp': data['lcp'] or None, 'nap': data['nap'], 'port': data['port']},
            context,
        )
        return Response({
            'success': True,
            'data': {
                'selection': result['selection'],
                'options': {
                    level: [serialize_option(option) for option in options]
                    for level, options in result['options'].items()
                },
            },
        })
