"""
ERP Identity - App Configuration
================================
"""

from django.apps import AppConfig


class CoreIdentityConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.identity"
    label = "core_identity"
    verbose_name = "ERP Identity"
