import atexit

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core"

    def ready(self):
        from .store import close_store, get_store

        # Creating the handle does not connect; the first operation does.
        get_store()
        atexit.register(close_store)
