from django.apps import AppConfig


class EldLogsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "eld_logs"
    verbose_name = "ELD Logs"
