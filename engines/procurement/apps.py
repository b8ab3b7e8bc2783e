from django.apps import AppConfig


class ProcurementConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "engines.procurement"
    label = "procurement"
    verbose_name = "ERP Procurement"
