"""App configuration for djforum.accounts."""

from django.apps import AppConfig


class AccountsAppConfig(AppConfig):
    """Default app configuration for djforum.accounts."""

    name = 'djforum.accounts'
    label = 'djforum_accounts'
    default_auto_field = 'django.db.models.AutoField'
