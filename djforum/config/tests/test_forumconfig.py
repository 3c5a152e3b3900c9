"""Unit tests for djforum.config.forumconfig."""

from __future__ import annotations

import kgb
from django.test.client import RequestFactory

from djforum import get_schema_version
from djforum.config import forumconfig
from djforum.config.forumconfig import ForumConfig
from djforum.config.middleware import ConfigMiddleware
from djforum.config.models import ConfigSetting
from djforum.config.signals import config_reloaded
from djforum.testing.testcases import TestCase


class ForumConfigTests(kgb.SpyAgency, TestCase):
    """Unit tests for djforum.config.forumconfig.ForumConfig."""

    def test_get_with_default(self) -> None:
        """Testing ForumConfig.get with nothing stored"""
        config = ForumConfig.get_instance()

        self.assertEqual(config.get('maintenance_mode'), '0')
        self.assertEqual(config.get('name'), 'Djforum')
        self.assertEqual(config.get('version'), get_schema_version())
        self.assertIsNone(config.get('not-a-setting'))

    def test_get_with_explicit_default(self) -> None:
        """Testing ForumConfig.get with an explicit default"""
        config = ForumConfig.get_instance()

        self.assertEqual(config.get('not-a-setting', 'abc'), 'abc')

    def test_get_with_stored(self) -> None:
        """Testing ForumConfig.get with a stored value"""
        ConfigSetting.objects.create(name='version', value='1.4')

        self.assertEqual(ForumConfig.get_instance().get('version'), '1.4')

    def test_get_all(self) -> None:
        """Testing ForumConfig.get_all merges stored values over defaults"""
        ConfigSetting.objects.create(name='name', value='My Forum')

        all_settings = ForumConfig.get_instance().get_all()

        self.assertEqual(all_settings['name'], 'My Forum')
        self.assertEqual(all_settings['hot_minimum'], '20')
        self.assertEqual(all_settings['version'], get_schema_version())

    def test_set(self) -> None:
        """Testing ForumConfig.set"""
        config = ForumConfig.get_instance()

        with self.assertLogs('djforum.config.forumconfig', 'INFO'):
            config.set('maintenance_mode', True)

        self.assertEqual(config.get('maintenance_mode'), '1')
        self.assertTrue(config.is_maintenance_mode())
        self.assertEqual(
            ConfigSetting.objects.get(name='maintenance_mode').value,
            '1')

    def test_set_updates_existing(self) -> None:
        """Testing ForumConfig.set with an existing stored value"""
        ConfigSetting.objects.create(name='hot_minimum', value='20')
        config = ForumConfig.get_instance()

        config.set('hot_minimum', 50)

        self.assertEqual(ConfigSetting.objects.filter(
            name='hot_minimum').count(), 1)
        self.assertEqual(config.get('hot_minimum'), '50')

    def test_add_default(self) -> None:
        """Testing ForumConfig.add_default"""
        self.addCleanup(forumconfig._DEFAULTS.pop, 'test_flag', None)

        ForumConfig.add_default('test_flag', False)

        self.assertEqual(ForumConfig.get_instance().get('test_flag'), '0')

    def test_get_instance_is_cached(self) -> None:
        """Testing ForumConfig.get_instance returns the same instance"""
        self.assertIs(ForumConfig.get_instance(), ForumConfig.get_instance())

    def test_is_expired_after_set_elsewhere(self) -> None:
        """Testing ForumConfig.is_expired after another instance changes a
        setting
        """
        config = ForumConfig.get_instance()
        self.assertFalse(config.is_expired())

        # Simulate another process.
        ForumConfig().set('name', 'Other Forum')

        self.assertTrue(config.is_expired())

    def test_is_expired_after_own_set(self) -> None:
        """Testing ForumConfig.is_expired after changing a setting on the
        same instance
        """
        config = ForumConfig.get_instance()
        config.set('name', 'Own Forum')

        self.assertFalse(config.is_expired())

    def test_check_expired(self) -> None:
        """Testing ForumConfig.check_expired reloads an expired
        configuration
        """
        config = ForumConfig.get_instance()
        ForumConfig().set('name', 'Other Forum')

        ForumConfig.check_expired()

        new_config = ForumConfig.get_instance()
        self.assertIsNot(new_config, config)
        self.assertEqual(new_config.get('name'), 'Other Forum')

    def test_check_expired_not_expired(self) -> None:
        """Testing ForumConfig.check_expired keeps a current configuration"""
        config = ForumConfig.get_instance()

        ForumConfig.check_expired()

        self.assertIs(ForumConfig.get_instance(), config)

    def test_check_expired_emits_signal(self) -> None:
        """Testing ForumConfig.check_expired emits config_reloaded"""
        def _on_reloaded(**kwargs):
            pass

        self.spy_on(_on_reloaded)
        config_reloaded.connect(_on_reloaded)
        self.addCleanup(config_reloaded.disconnect, _on_reloaded)

        config = ForumConfig.get_instance()
        ForumConfig().set('name', 'Other Forum')

        ForumConfig.check_expired()

        self.assertSpyCalledWith(_on_reloaded,
                                 sender=ForumConfig,
                                 config=ForumConfig.get_instance(),
                                 old_config=config)


class ConfigMiddlewareTests(kgb.SpyAgency, TestCase):
    """Unit tests for djforum.config.middleware.ConfigMiddleware."""

    def test_process_request(self) -> None:
        """Testing ConfigMiddleware.process_request checks for an expired
        configuration
        """
        self.spy_on(ForumConfig.check_expired)

        middleware = ConfigMiddleware(lambda request: None)
        middleware.process_request(RequestFactory().get('/'))

        self.assertSpyCalled(ForumConfig.check_expired)
