"""
Service Orders — Django Admin Configuration

@file service_orders/admin.py
"""

from django.contrib import admin

from .models import ServiceOrder


@admin.register(ServiceOrder)
class ServiceOrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'account_no', 'support_status', 'repair_category', 'lcpnap', 'port_number', 'created_at')
    list_filter = ('support_status', 'repair_category')
    search_fields = ('account_no', 'full_name', 'assigned_email')
    raw_id_fields = ('lcpnap', 'region', 'city', 'barangay', 'location')
    list_select_related = ('lcpnap',)
    readonly_fields = ('created_at', 'updated_at', 'created_by', 'updated_by')
