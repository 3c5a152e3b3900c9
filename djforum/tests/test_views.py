"""Unit tests for djforum.views."""

from __future__ import annotations

from djforum.accounts.models import ForumUser
from djforum.testing.testcases import TestCase


class ViewTests(TestCase):
    """Unit tests for the forum views."""

    def test_maintenance_when_off(self) -> None:
        """Testing maintenance view outside of maintenance mode"""
        response = self.client.get('/forum/maintenance/')

        self.assertRedirects(response, '/forum/')

    def test_maintenance_when_on(self) -> None:
        """Testing maintenance view in maintenance mode"""
        with self.config_settings({'maintenance_mode': True,
                                   'name': 'Test Forum'}):
            response = self.client.get('/forum/maintenance/')

        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'Test Forum is currently undergoing '
                                      'maintenance.')

    def test_profile_details_anonymous(self) -> None:
        """Testing profile_details view with an anonymous user"""
        response = self.client.get('/forum/profile/details/')

        self.assertRedirects(response,
                             '/login/?next=/forum/profile/details/',
                             fetch_redirect_response=False)

    def test_profile_details(self) -> None:
        """Testing profile_details view"""
        user = self.create_user()
        forum_user = self.create_forum_user(user)
        self.client.force_login(user)

        response = self.client.get('/forum/profile/details/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['forum_user'], forum_user)

    def test_settings_non_admin(self) -> None:
        """Testing settings view with a user without the administrator
        capability
        """
        user = self.create_user()
        self.create_forum_user(user)
        self.client.force_login(user)

        response = self.client.get('/forum/admin/settings/')

        self.assertEqual(response.status_code, 403)

    def test_settings_admin(self) -> None:
        """Testing settings view with an administrator"""
        user = self.create_user()
        self.create_forum_user(user, role=ForumUser.ROLE_ADMIN)
        self.client.force_login(user)

        response = self.client.get('/forum/admin/settings/')

        self.assertEqual(response.status_code, 200)
        self.assertIn(('hot_minimum', '20'),
                      response.context['forum_settings'])

    def test_level_up(self) -> None:
        """Testing level_up view with an older database version"""
        user = self.create_user(is_superuser=True)
        self.create_forum_user(user)
        self.client.force_login(user)

        with self.config_settings({'version': '1.4'}):
            response = self.client.get('/forum/install/level-up/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context['db_version'], '1.4')
        self.assertEqual(response.context['module_version'], '1.5.0')
        self.assertTrue(response.context['upgrade_needed'])
