from django.apps import AppConfig


class CoreConfig(AppConfig):
    """
    Configuration for Core application

    This app contains:
        - OwnedModel / OwnedQuerySet (row-level security for every CRM table)
        - Dashboard view
        - Formatting helpers and the crm_format template filters
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    verbose_name = 'Core'
