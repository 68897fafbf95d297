"""
Network — Serializers

@file network/serializers.py
"""

from rest_framework import serializers

from .models import LcpNapNode


class LcpNapNodeReadSerializer(serializers.ModelSerializer):
    location_name = serializers.CharField(source='location.full_path', read_only=True, default=None)

    class Meta:
        model = LcpNapNode
        fields = [
            'id', 'name', 'lcp_name', 'nap_name', 'port_total',
            'street', 'location', 'location_name', 'coordinates',
            'modified_by', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class LcpNapNodeWriteSerializer(serializers.Serializer):
    """
    Raw modal input. Field-level requirements are left to the
    LCP-NAP location rule set so every failing field is reported at once.
    """

    lcp_name = serializers.CharField(required=False, allow_blank=True, default='')
    nap_name = serializers.CharField(required=False, allow_blank=True, default='')
    lcpnap_name = serializers.CharField(required=False, allow_blank=True, default='')
    port_total = serializers.IntegerField(required=False, allow_null=True, default=None)
    street = serializers.CharField(required=False, allow_blank=True, default='')
    coordinates = serializers.CharField(required=False, allow_blank=True, default='')
    region = serializers.IntegerField(required=False, allow_null=True, default=None)
    city = serializers.IntegerField(required=False, allow_null=True, default=None)
    barangay = serializers.IntegerField(required=False, allow_null=True, default=None)
    location = serializers.IntegerField(required=False, allow_null=True, default=None)


class PortSlotSerializer(serializers.Serializer):
    node_id = serializers.IntegerField()
    port_number = serializers.IntegerField()
    occupant_service_order_id = serializers.IntegerField(allow_null=True)
    label = serializers.SerializerMethodField()

    def get_label(self, obj):
        return f'P{obj.port_number:02d}'


class PortQuerySerializer(serializers.Serializer):
    current_service_order = serializers.IntegerField(required=False, allow_null=True, default=None)


class PortCascadeQuerySerializer(serializers.Serializer):
    lcp = serializers.CharField(required=False, allow_blank=True, default='')
    nap = serializers.IntegerField(required=False, allow_null=True, default=None)
    port = serializers.IntegerField(required=False, allow_null=True, default=None)
    current_service_order = serializers.IntegerField(required=False, allow_null=True, default=None)


def serialize_option(option) -> dict:
    """One LCP / node / port option as the picker renders it."""
    if option.kind == 'lcp':
        return {'id': option.id, 'name': option.name, 'kind': option.kind}
    if option.kind == 'nap':
        return {
            'id': option.id, 'name': option.label, 'kind': option.kind,
            'nap_name': option.nap_name, 'port_total': option.port_total,
        }
    return PortSlotSerializer(option).data
