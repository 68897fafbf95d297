"""
Modal Forms — Application Configuration
"""

from django.apps import AppConfig


class ModalFormsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'modal_forms'
    verbose_name = 'Modal Forms'
