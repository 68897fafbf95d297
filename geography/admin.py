"""
Geography — Django Admin Configuration

Tree-like display of geographic entities with parent chain, filter by
kind, and search.

@file geography/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import GeoEntity

KIND_COLORS = {
    'region': '#1d4ed8',
    'city': '#7c3aed',
    'barangay': '#0891b2',
    'location': '#65a30d',
}


@admin.register(GeoEntity)
class GeoEntityAdmin(admin.ModelAdmin):
    list_display = ('name', 'kind_badge', 'parent_display', 'children_count', 'created_at')
    list_filter = ('kind',)
    search_fields = ('name',)
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    raw_id_fields = ('parent',)
    list_select_related = ('parent',)
    list_per_page = 50
    ordering = ('kind', 'name')

    fieldsets = (
        (None, {
            'fields': ('id', 'name', 'kind', 'parent'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Kind'))
    def kind_badge(self, obj):
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px;">{}</span>',
            KIND_COLORS.get(obj.kind, '#6b7280'), obj.get_kind_display(),
        )

    @admin.display(description=_('Parent'))
    def parent_display(self, obj):
        return obj.parent.full_path if obj.parent else '-'

    @admin.display(description=_('Children'))
    def children_count(self, obj):
        return obj.children.count()
