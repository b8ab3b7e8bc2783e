from django.apps import AppConfig


class StoresConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "engines.stores"
    label = "stores"
    verbose_name = "ERP Stores"
