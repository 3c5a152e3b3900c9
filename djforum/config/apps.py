"""App configuration for djforum.config."""

from django.apps import AppConfig


class ConfigAppConfig(AppConfig):
    """Default app configuration for djforum.config."""

    name = 'djforum.config'
    label = 'djforum_config'
    default_auto_field = 'django.db.models.AutoField'
