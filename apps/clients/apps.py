from django.apps import AppConfig


class ClientsConfig(AppConfig):
    """
    Clients, their contact log and the sales pipeline
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.clients'
    verbose_name = 'Clients'
