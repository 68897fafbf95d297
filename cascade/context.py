"""
Cascade — Modal Context

Explicit per-modal configuration. Everything a form needs to know
about who is editing what is passed in here at construction time.

@file cascade/context.py
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ModalContext:
    user_email: str = ''
    user_role: str = ''
    editing_record_id: int | None = None
    billing_day_max: int = 30
    port_totals: tuple[int, ...] = (8, 16, 32)
    extras: dict = field(default_factory=dict)

    @property
    def is_technician(self) -> bool:
        return self.user_role.strip().lower() == 'technician'

    @property
    def is_editing(self) -> bool:
        return self.editing_record_id is not None
