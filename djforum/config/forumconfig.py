"""Process-wide access to the stored forum configuration."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from djforum import get_schema_version
from djforum.cache.synchronizer import GenerationSynchronizer
from djforum.config.models import ConfigSetting
from djforum.config.signals import config_reloaded


logger = logging.getLogger(__name__)


#: The cache key used to synchronize configuration between processes.
CONFIG_GENERATION_KEY = 'djforum:config:generation'


_DEFAULTS: Dict[str, str] = {
    'from_email': 'no-reply@example.com',
    'from_name': 'Djforum',
    'hot_minimum': '20',
    'maintenance_mode': '0',
    'members_visible': '1',
    'name': 'Djforum',
    'registration_off': '0',
}

_instance: Optional[ForumConfig] = None


def _normalize_value(value) -> str:
    """Return the stored string form of a setting value.

    Booleans are stored as ``"1"`` and ``"0"``, matching the values of flag
    settings such as ``maintenance_mode``.

    Args:
        value (object):
            The value to normalize.

    Returns:
        str:
        The normalized value.
    """
    if isinstance(value, bool):
        return '1' if value else '0'

    return str(value)


class ForumConfig:
    """Stored settings for the forum.

    Settings are loaded from the database once per process and cached. When
    any process changes a setting through :py:meth:`set`, the shared
    generation number is bumped, and every other process drops its copy on
    the next call to :py:meth:`check_expired` (performed for each request
    by :py:class:`~djforum.config.middleware.ConfigMiddleware`).

    Consumers should use :py:meth:`get_instance` rather than constructing
    this directly. Callers should not hold on to the instance between
    requests, since it may be replaced once expired.
    """

    ######################
    # Instance variables #
    ######################

    #: The loaded settings.
    settings: Dict[str, str]

    @classmethod
    def get_instance(cls) -> ForumConfig:
        """Return the forum configuration for this process.

        The configuration is loaded on first access and cached until it
        expires.

        Returns:
            ForumConfig:
            The current forum configuration.
        """
        global _instance

        if _instance is None:
            _instance = cls()

        return _instance

    @classmethod
    def clear_instance(cls) -> None:
        """Drop the cached configuration.

        The next call to :py:meth:`get_instance` will load settings from the
        database.
        """
        global _instance

        _instance = None

    @classmethod
    def check_expired(cls) -> None:
        """Drop the cached configuration if another process changed it.

        If there are listeners for
        :py:data:`~djforum.config.signals.config_reloaded`, a new
        configuration is loaded immediately and the signal is emitted.
        Otherwise, loading waits until the next call to
        :py:meth:`get_instance`.
        """
        global _instance

        old_config = _instance

        if old_config is None or not old_config.is_expired():
            return

        _instance = None
        logger.debug('Forum configuration expired. It will be reloaded.')

        if config_reloaded.has_listeners():
            config_reloaded.send(sender=cls,
                                 config=cls.get_instance(),
                                 old_config=old_config)

    @classmethod
    def add_default(cls, key: str, value) -> None:
        """Register a default value for a setting.

        Args:
            key (str):
                The name of the setting.

            value (object):
                The default value. This will be normalized to a string.
        """
        cls.add_defaults({key: value})

    @classmethod
    def add_defaults(cls, defaults: Dict[str, object]) -> None:
        """Register default values for settings.

        Args:
            defaults (dict):
                A dictionary mapping setting names to default values.
        """
        _DEFAULTS.update(
            (key, _normalize_value(value))
            for key, value in defaults.items()
        )

    @classmethod
    def get_defaults(cls) -> Dict[str, str]:
        """Return all registered defaults.

        The ``version`` default is the schema version of the installed
        code.

        Returns:
            dict:
            A dictionary mapping setting names to default values.
        """
        return dict(_DEFAULTS, version=get_schema_version())

    def __init__(self) -> None:
        """Initialize the configuration, loading stored settings."""
        # The synchronizer must exist before loading, so that changes made
        # while loading still expire this instance.
        self._gen_sync = GenerationSynchronizer(CONFIG_GENERATION_KEY)
        self.settings = dict(
            ConfigSetting.objects.values_list('name', 'value'))

    def get(
        self,
        key: str,
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Return the value for a setting.

        If nothing is stored for the setting, ``default`` is returned if
        provided, and otherwise the registered default (or ``None``).

        Args:
            key (str):
                The name of the setting.

            default (str, optional):
                The value to return if nothing is stored.

        Returns:
            str:
            The stored or default value.
        """
        try:
            return self.settings[key]
        except KeyError:
            pass

        if default is not None:
            return default

        return self.get_defaults().get(key)

    def get_all(self) -> Dict[str, str]:
        """Return all settings merged over their defaults.

        Returns:
            dict:
            A dictionary mapping setting names to values.
        """
        return dict(self.get_defaults(), **self.settings)

    def set(self, key: str, value) -> None:
        """Store a value for a setting.

        The value is saved immediately, and all other processes are told
        to reload their configuration.

        Args:
            key (str):
                The name of the setting.

            value (object):
                The value to store. This will be normalized to a string.
        """
        value = _normalize_value(value)

        ConfigSetting.objects.update_or_create(name=key,
                                               defaults={'value': value})
        self.settings[key] = value
        self._gen_sync.mark_updated()

        logger.info('Forum setting "%s" changed to "%s"', key, value)

    def is_expired(self) -> bool:
        """Return whether another process has changed the configuration.

        Returns:
            bool:
            ``True`` if the configuration must be reloaded.
        """
        return self._gen_sync.is_expired()

    def is_maintenance_mode(self) -> bool:
        """Return whether the forum is in maintenance mode.

        Returns:
            bool:
            ``True`` if ``maintenance_mode`` is ``"1"``.
        """
        return self.get('maintenance_mode') == '1'
