"""
ERP Documents - App Configuration
=================================
Persistent document sequence state.
"""

from django.apps import AppConfig


class CoreDocumentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core.documents"
    label = "core_documents"
    verbose_name = "ERP Documents"
