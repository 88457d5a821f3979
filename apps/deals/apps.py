from django.apps import AppConfig


class DealsConfig(AppConfig):

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.deals'
    verbose_name = 'Deal Pipeline'

    def ready(self):
        # Registers the stage seeding handler
        import apps.deals.signals  # noqa: F401
