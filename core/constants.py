"""
Core — Constants

@file core/constants.py
"""

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 1000

# Support status values shared by the service-order form and its rules.
SUPPORT_STATUS_IN_PROGRESS = 'In Progress'
SUPPORT_STATUS_RESOLVED = 'Resolved'
SUPPORT_STATUS_FAILED = 'Failed'
SUPPORT_STATUS_FOR_VISIT = 'For Visit'

REPAIR_CATEGORIES = [
    'Fiber Relaying',
    'Migrate',
    'others',
    'Pullout',
    'Reboot/Reconfig Router',
    'Relocate Router',
    'Relocate',
    'Replace Patch Cord',
    'Replace Router',
    'Resplice',
    'Transfer LCP/NAP/PORT',
    'Update Vlan',
]

# Repair categories that move the subscriber to a different LCP-NAP port.
PORT_TRANSFER_CATEGORIES = ('Migrate', 'Relocate', 'Transfer LCP/NAP/PORT')
