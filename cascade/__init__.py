"""
Cascade — Form Core

Framework-free building blocks shared by every modal form:
hierarchy lookups, dependent-selection control, port allocation,
declarative validation and the per-modal session that ties them together.

@file cascade/__init__.py
"""

from .context import ModalContext
from .controller import GEO_LEVELS, PORT_LEVELS, CascadeController
from .exceptions import CascadeError, EmptyInputError, SubmissionRefused, UnknownLevelError
from .hierarchy import GeoEntity, HierarchyIndex
from .loader import FetchTicket, ReferenceDataLoader
from .ports import PortAllocationIndex, PortNode, PortSlot
from .session import FormSession
from .validation import ValidationEngine, ValidationRule

__all__ = [
    'CascadeController',
    'CascadeError',
    'EmptyInputError',
    'FetchTicket',
    'FormSession',
    'GEO_LEVELS',
    'GeoEntity',
    'HierarchyIndex',
    'ModalContext',
    'PORT_LEVELS',
    'PortAllocationIndex',
    'PortNode',
    'PortSlot',
    'ReferenceDataLoader',
    'SubmissionRefused',
    'UnknownLevelError',
    'ValidationEngine',
    'ValidationRule',
]
