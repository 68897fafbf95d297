"""
Service Orders — Serializers

@file service_orders/serializers.py
"""

from rest_framework import serializers

from geography.serializers import GeoEntityMinimalSerializer

from .models import ServiceOrder


class ServiceOrderReadSerializer(serializers.ModelSerializer):
    lcpnap_name = serializers.CharField(source='lcpnap.name', read_only=True, default=None)
    region = GeoEntityMinimalSerializer(read_only=True)
    city = GeoEntityMinimalSerializer(read_only=True)
    barangay = GeoEntityMinimalSerializer(read_only=True)
    location = GeoEntityMinimalSerializer(read_only=True)

    class Meta:
        model = ServiceOrder
        fields = [
            'id', 'account_no', 'full_name', 'support_status', 'repair_category',
            'assigned_email', 'concern', 'support_remarks', 'new_router_sn', 'new_vlan',
            'lcpnap', 'lcpnap_name', 'port_number',
            'region', 'city', 'barangay', 'location',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ServiceOrderEditSerializer(serializers.Serializer):
    """
    Edit modal input. Only type coercion happens here; conditional
    requirements belong to the service-order rule set.
    """

    support_status = serializers.CharField(required=False, allow_blank=True)
    repair_category = serializers.CharField(required=False, allow_blank=True)
    assigned_email = serializers.CharField(required=False, allow_blank=True)
    concern = serializers.CharField(required=False, allow_blank=True)
    support_remarks = serializers.CharField(required=False, allow_blank=True)
    new_router_sn = serializers.CharField(required=False, allow_blank=True)
    new_vlan = serializers.CharField(required=False, allow_blank=True)
    lcpnap = serializers.IntegerField(required=False, allow_null=True)
    port = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    region = serializers.IntegerField(required=False, allow_null=True)
    city = serializers.IntegerField(required=False, allow_null=True)
    barangay = serializers.IntegerField(required=False, allow_null=True)
    location = serializers.IntegerField(required=False, allow_null=True)
