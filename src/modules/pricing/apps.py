from django.apps import AppConfig


class PricingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.pricing"
    label = "pricing"
    verbose_name = "Special pricing"
