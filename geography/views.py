"""
Geography — Views

Read-heavy ViewSet for geographic entities. Besides CRUD it serves the
endpoints modal forms use to populate their region → city → barangay →
location pickers.

@file geography/views.py
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import GeoEntity
from .permissions import CanModifyGeography
from .serializers import (
    GeoCascadeQuerySerializer,
    GeoEntityReadSerializer,
    GeoEntityTreeSerializer,
    GeoEntityWriteSerializer,
    GeoRecordSerializer,
)
from .services import GeographyService


class GeoEntityViewSet(viewsets.ModelViewSet):
    """
    CRUD for geographic entities.

    List / retrieve is open to any authenticated user.
    Create / update / delete restricted to staff.
    """

    permission_classes = [IsAuthenticated, CanModifyGeography]
    filterset_fields = ['kind', 'parent']
    search_fields = ['name']
    ordering_fields = ['name', 'kind', 'created_at']
    ordering = ['kind', 'name']

    def get_queryset(self):
        return GeoEntity.objects.select_related('parent')

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return GeoEntityReadSerializer
        return GeoEntityWriteSerializer

    @action(detail=False, methods=['get'], url_path='regions')
    def regions(self, request):
        qs = GeographyService.get_regions()
        serializer = GeoEntityReadSerializer(qs, many=True)
        return Response({'success': True, 'data': serializer.data})

    @action(detail=True, methods=['get'], url_path='children')
    def children(self, request, pk=None):
        qs = GeographyService.get_children(pk)
        serializer = GeoEntityReadSerializer(qs, many=True)
        return Response({'success': True, 'data': serializer.data})

    @action(detail=True, methods=['get'], url_path='hierarchy')
    def hierarchy(self, request, pk=None):
        chain = GeographyService.get_hierarchy(pk)
        return Response({'success': True, 'data': chain})

    @action(detail=False, methods=['get'], url_path='tree')
    def tree(self, request):
        """Return the full region tree (depth limited to 2 by default)."""
        depth = int(request.query_params.get('depth', 2))
        regions = GeoEntity.objects.filter(
            kind=GeoEntity.Kind.REGION,
        ).prefetch_related('children__children').order_by('name')
        serializer = GeoEntityTreeSerializer(
            regions, many=True, context={'depth': depth},
        )
        return Response({'success': True, 'data': serializer.data})

    @action(detail=False, methods=['get'], url_path='options')
    def cascade_options(self, request):
        """
        Picker contents for every level given the current selection,
        e.g. ``?region=1&city=4``. Levels whose ancestor is unset are empty.
        """
        query = GeoCascadeQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        result = GeographyService.cascade_options(query.validated_data)
        return Response({
            'success': True,
            'data': {
                'selection': result['selection'],
                'options': {
                    level: GeoRecordSerializer(records, many=True).data
                    for level, records in result['options'].items()
                },
            },
        })
