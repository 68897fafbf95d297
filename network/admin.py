"""
Network — Django Admin Configuration

@file network/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import LcpNapNode
from .services import PortAllocationService


@admin.register(LcpNapNode)
class LcpNapNodeAdmin(admin.ModelAdmin):
    list_display = ('name', 'lcp_name', 'nap_name', 'port_total', 'ports_in_use', 'modified_by')
    list_filter = ('port_total',)
    search_fields = ('name', 'lcp_name', 'nap_name')
    raw_id_fields = ('location',)
    readonly_fields = ('created_at', 'updated_at', 'created_by', 'updated_by')

    @admin.display(description=_('Ports in use'))
    def ports_in_use(self, obj):
        used = len(PortAllocationService.fetch_occupancy(obj.pk))
        return f'{used} / {obj.port_total}'
