"""
Network — Application Configuration
"""

from django.apps import AppConfig


class NetworkConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'network'
    verbose_name = 'LCP-NAP Network'
