from django.apps import AppConfig


class HoldsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.holds"
    verbose_name = "Holds"
