"""
Geography — Models

Self-referencing GeoEntity model for the service-area hierarchy:
Region → City → Barangay → Location.

Parent nullability is enforced via CheckConstraint at the DB level;
the parent's kind is checked by the write serializer and ``clean``.

@file geography/models.py
"""

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from cascade.hierarchy import GeoEntity as GeoRecord
from core.models import BaseModel


class GeoEntity(BaseModel):
    """
    One node of the geographic reference hierarchy.

    Regions have no parent; every other kind has exactly one parent of
    the immediately preceding kind.
    """

    class Kind(models.TextChoices):
        REGION = 'region', _('Region')
        CITY = 'city', _('City / Municipality')
        BARANGAY = 'barangay', _('Barangay')
        LOCATION = 'location', _('Location')

    PARENT_KIND_MAP = {
        'city': 'region',
        'barangay': 'city',
        'location': 'barangay',
    }

    name = models.CharField(_('name'), max_length=150)
    kind = models.CharField(
        _('kind'), max_length=10,
        choices=Kind.choices, db_index=True,
    )
    parent = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.CASCADE,
        related_name='children',
        verbose_name=_('parent'),
    )

    class Meta:
        verbose_name = _('geographic entity')
        verbose_name_plural = _('geographic entities')
        ordering = ['kind', 'name']
        indexes = [
            models.Index(fields=['kind', 'parent']),
            models.Index(fields=['name']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(kind='region', parent__isnull=True)
                    | models.Q(kind__in=['city', 'barangay', 'location'], parent__isnull=False)
                ),
                name='geo_valid_parent_nullability',
            ),
            models.UniqueConstraint(
                fields=['parent', 'kind', 'name'],
                name='geo_unique_name_per_parent',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.get_kind_display()})'

    def clean(self):
        expected = self.PARENT_KIND_MAP.get(self.kind)
        if self.kind == self.Kind.REGION and self.parent_id:
            raise ValidationError({'parent': 'Region must not have a parent.'})
        if expected and self.parent is None:
            raise ValidationError({'parent': f'{self.get_kind_display()} requires a parent.'})
        if expected and self.parent.kind != expected:
            raise ValidationError(
                {'parent': f'{self.kind} parent must be a {expected}, got {self.parent.kind}.'},
            )

    @property
    def full_path(self) -> str:
        """Return the full hierarchy path, e.g. 'NCR > Quezon City > Bagumbayan'."""
        parts = [self.name]
        current = self.parent
        while current:
            parts.insert(0, current.name)
            current = current.parent
        return ' > '.join(parts)

    def to_record(self) -> GeoRecord:
        return GeoRecord(id=self.pk, name=self.name, kind=self.kind, parent_id=self.parent_id)
