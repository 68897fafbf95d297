"""
Service Orders — Models

A support ticket against a subscriber's connection. A service order
holding an LCP-NAP port is that port's occupant; the database allows
at most one occupant per (node, port).

@file service_orders/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import (
    REPAIR_CATEGORIES,
    SUPPORT_STATUS_FAILED,
    SUPPORT_STATUS_FOR_VISIT,
    SUPPORT_STATUS_IN_PROGRESS,
    SUPPORT_STATUS_RESOLVED,
)
from core.models import BaseModel


class ServiceOrder(BaseModel):

    class SupportStatus(models.TextChoices):
        IN_PROGRESS = SUPPORT_STATUS_IN_PROGRESS, _('In Progress')
        RESOLVED = SUPPORT_STATUS_RESOLVED, _('Resolved')
        FAILED = SUPPORT_STATUS_FAILED, _('Failed')
        FOR_VISIT = SUPPORT_STATUS_FOR_VISIT, _('For Visit')

    account_no = models.CharField(_('account no.'), max_length=50, db_index=True)
    full_name = models.CharField(_('full name'), max_length=200, blank=True, default='')
    support_status = models.CharField(
        _('support status'), max_length=20,
        choices=SupportStatus.choices, default=SupportStatus.IN_PROGRESS, db_index=True,
    )
    repair_category = models.CharField(
        _('repair category'), max_length=40, blank=True, default='',
        choices=[(c, c) for c in REPAIR_CATEGORIES],
    )
    assigned_email = models.EmailField(_('assigned email'), blank=True, default='')
    concern = models.CharField(_('concern'), max_length=100, blank=True, default='')
    support_remarks = models.TextField(_('support remarks'), blank=True, default='')
    new_router_sn = models.CharField(_('new router SN'), max_length=100, blank=True, default='')
    new_vlan = models.CharField(_('new VLAN'), max_length=50, blank=True, default='')

    lcpnap = models.ForeignKey(
        'network.LcpNapNode',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='service_orders',
        verbose_name=_('LCP-NAP'),
    )
    port_number = models.PositiveSmallIntegerField(_('port'), null=True, blank=True)

    region = models.ForeignKey(
        'geography.GeoEntity', null=True, blank=True, on_delete=models.SET_NULL,
        related_name='+', limit_choices_to={'kind': 'region'}, verbose_name=_('region'),
    )
    city = models.ForeignKey(
        'geography.GeoEntity', null=True, blank=True, on_delete=models.SET_NULL,
        related_name='+', limit_choices_to={'kind': 'city'}, verbose_name=_('city'),
    )
    barangay = models.ForeignKey(
        'geography.GeoEntity', null=True, blank=True, on_delete=models.SET_NULL,
        related_name='+', limit_choices_to={'kind': 'barangay'}, verbose_name=_('barangay'),
    )
    location = models.ForeignKey(
        'geography.GeoEntity', null=True, blank=True, on_delete=models.SET_NULL,
        related_name='+', limit_choices_to={'kind': 'location'}, verbose_name=_('location'),
    )

    class Meta:
        verbose_name = _('service order')
        verbose_name_plural = _('service orders')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['lcpnap', 'port_number'],
                condition=models.Q(lcpnap__isnull=False, port_number__isnull=False),
                name='service_order_one_occupant_per_port',
            ),
        ]

    def __str__(self):
        return f'SO-{self.pk} {self.account_no} ({self.support_status})'

    def form_values(self) -> dict:
        """Current values under the service-order edit form's field names."""
        return {
            'support_status': self.support_status,
            'repair_category': self.repair_category,
            'assigned_email': self.assigned_email,
            'concern': self.concern,
            'support_remarks': self.support_remarks,
            'new_router_sn': self.new_router_sn,
            'new_vlan': self.new_vlan,
            'lcpnap': self.lcpnap_id,
            'port': self.port_number,
            'region': self.region_id,
            'city': self.city_id,
            'barangay': self.barangay_id,
            'location': self.location_id,
        }
