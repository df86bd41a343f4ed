from django.apps import AppConfig

class UsersConfig(AppConfig):
    """Django app config for user profiles and the follow graph; loads signal handlers on ready."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'users'

    def ready(self):
        """Import signal modules to register handlers."""
        import users.signals
