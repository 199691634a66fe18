from django.apps import AppConfig


class ConstructionsConfig(AppConfig):

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.constructions'
    verbose_name = 'Constructions'
