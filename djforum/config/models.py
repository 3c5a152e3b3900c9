"""Database models for storing forum configuration."""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ConfigSetting(models.Model):
    """A single stored forum setting.

    Settings are stored as name/value string pairs. Consumers should not
    query this model directly, and should instead use
    :py:meth:`ForumConfig.get_instance()
    <djforum.config.forumconfig.ForumConfig.get_instance>`, which caches
    settings and keeps them synchronized between processes.
    """

    name = models.CharField(
        max_length=255,
        unique=True,
        help_text=_('The name of the setting.'))

    value = models.TextField(
        blank=True,
        help_text=_('The stored value of the setting.'))

    def __str__(self):
        """Return a string representation of the setting.

        Returns:
            str:
            The setting name and value.
        """
        return '%s = %s' % (self.name, self.value)

    class Meta:
        db_table = 'djforum_config'
        ordering = ('name',)
        verbose_name = _('Forum setting')
        verbose_name_plural = _('Forum settings')
