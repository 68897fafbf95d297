"""
Modal Forms — Context Construction

Builds the explicit ModalContext a form session runs with from the
authenticated user and project settings.

@file modal_forms/context.py
"""

from django.conf import settings

from cascade.context import ModalContext

TECHNICIAN_GROUP = 'technician'


def user_role(user) -> str:
    if user is None or not getattr(user, 'is_authenticated', False):
        return ''
    if user.groups.filter(name__iexact=TECHNICIAN_GROUP).exists():
        return TECHNICIAN_GROUP
    return 'staff' if user.is_staff else 'user'


def build_modal_context(user=None, *, editing_record_id=None, role: str | None = None) -> ModalContext:
    return ModalContext(
        user_email=getattr(user, 'email', '') or '',
        user_role=role if role is not None else user_role(user),
        editing_record_id=editing_record_id,
        billing_day_max=settings.BILLING_DAY_MAX,
        port_totals=tuple(settings.LCPNAP_PORT_TOTALS),
    )
