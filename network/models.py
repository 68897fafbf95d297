"""
Network — Models

LCP-NAP distribution nodes. A node is identified by its combined
"LCP NAP" label and exposes a fixed number of ports; port occupancy
lives on the service orders assigned to it.

@file network/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from cascade.ports import PortNode
from core.models import BaseModel


class LcpNapNode(BaseModel):
    """Physical LCP-NAP node with ``port_total`` allocatable ports."""

    class PortTotal(models.IntegerChoices):
        EIGHT = 8, '8'
        SIXTEEN = 16, '16'
        THIRTY_TWO = 32, '32'

    lcp_name = models.CharField(_('LCP'), max_length=100, db_index=True)
    nap_name = models.CharField(_('NAP'), max_length=100)
    name = models.CharField(_('LCPNAP'), max_length=210, unique=True)
    port_total = models.PositiveSmallIntegerField(
        _('port total'), choices=PortTotal.choices, default=PortTotal.THIRTY_TWO,
    )
    street = models.CharField(_('street'), max_length=255, blank=True, default='')
    location = models.ForeignKey(
        'geography.GeoEntity',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='lcpnap_nodes',
        limit_choices_to={'kind': 'location'},
        verbose_name=_('location'),
    )
    coordinates = models.CharField(_('coordinates'), max_length=64, blank=True, default='')
    modified_by = models.EmailField(_('modified by'), blank=True, default='')

    class Meta:
        verbose_name = _('LCP-NAP node')
        verbose_name_plural = _('LCP-NAP nodes')
        ordering = ['lcp_name', 'nap_name']
        constraints = [
            models.UniqueConstraint(fields=['lcp_name', 'nap_name'], name='lcpnap_unique_pair'),
        ]

    def __str__(self):
        return self.name

    @staticmethod
    def compose_name(lcp_name: str, nap_name: str) -> str:
        return f'{lcp_name.strip()} {nap_name.strip()}'.strip()

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self.compose_name(self.lcp_name, self.nap_name)
        super().save(*args, **kwargs)

    def to_record(self) -> PortNode:
        return PortNode(
            id=self.pk,
            lcp_name=self.lcp_name,
            nap_name=self.nap_name,
            port_total=self.port_total,
            name=self.name,
        )
