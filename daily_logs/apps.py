from django.apps import AppConfig


class DailyLogsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "daily_logs"
    verbose_name = "Daily Logs"
