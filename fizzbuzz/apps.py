from django.apps import AppConfig


class FizzbuzzConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "fizzbuzz"
