"""Database models for forum accounts."""

from __future__ import annotations

from typing import Optional

import pytz
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _


def validate_timezone(value):
    """Validate that a value names a known time zone.

    Args:
        value (str):
            The time zone name.

    Raises:
        django.core.exceptions.ValidationError:
            The time zone is not known.
    """
    if value and value not in pytz.all_timezones_set:
        raise ValidationError(
            _('"%(timezone)s" is not a valid time zone.'),
            code='invalid_timezone',
            params={'timezone': value})


class ForumUserManager(models.Manager):
    """Manages lookups of forum users."""

    def get_for_host_id(
        self,
        host_id: int,
    ) -> Optional[ForumUser]:
        """Return the forum user linked to a host application user.

        Args:
            host_id (int):
                The ID of the host application user.

        Returns:
            ForumUser:
            The linked forum user, or ``None`` if there isn't one yet.
        """
        return self.filter(inherited_id=host_id).first()


class ForumUser(models.Model):
    """A user's forum account.

    Forum accounts are either derived from a host application user (linked
    through :py:attr:`inherited_id`) or, when the forum owns its identity
    store, stand on their own.
    """

    STATUS_REGISTERED = 1
    STATUS_BANNED = 9
    STATUS_ACTIVE = 10

    STATUS_CHOICES = (
        (STATUS_REGISTERED, _('Registered')),
        (STATUS_BANNED, _('Banned')),
        (STATUS_ACTIVE, _('Active')),
    )

    ROLE_MEMBER = 1
    ROLE_MODERATOR = 9
    ROLE_ADMIN = 10

    ROLE_CHOICES = (
        (ROLE_MEMBER, _('Member')),
        (ROLE_MODERATOR, _('Moderator')),
        (ROLE_ADMIN, _('Administrator')),
    )

    DEFAULT_TIMEZONE = 'UTC'

    #: Validation scenario used when creating accounts automatically.
    #:
    #: Accounts created in this scenario don't yet have a username or
    #: e-mail address. Users fill these in afterward.
    SCENARIO_INSTALLATION = 'installation'

    #: Fields not validated for each scenario.
    SCENARIO_EXCLUDED_FIELDS = {
        SCENARIO_INSTALLATION: ('username', 'email'),
    }

    inherited_id = models.PositiveIntegerField(
        unique=True,
        null=True,
        blank=True,
        help_text=_('The ID of the host application user this account '
                    'belongs to.'))

    username = models.CharField(
        max_length=255,
        unique=True,
        null=True,
        help_text=_('The name shown for the user in the forum.'))

    email = models.EmailField(
        max_length=255,
        null=True,
        help_text=_('The e-mail address used for forum notifications.'))

    status = models.PositiveSmallIntegerField(
        choices=STATUS_CHOICES,
        default=STATUS_REGISTERED,
        db_index=True)

    role = models.PositiveSmallIntegerField(
        choices=ROLE_CHOICES,
        default=ROLE_MEMBER)

    timezone = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        default=DEFAULT_TIMEZONE,
        validators=[validate_timezone],
        help_text=_('The time zone used to show dates to the user.'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ForumUserManager()

    @property
    def is_banned(self) -> bool:
        """Whether the user is banned from the forum."""
        return self.status == self.STATUS_BANNED

    def has_role(self, role: int) -> bool:
        """Return whether the user's role is at least the given role.

        Args:
            role (int):
                One of the ``ROLE_*`` constants.

        Returns:
            bool:
            ``True`` if the user's role grants the given role.
        """
        return self.role >= role

    def validate_for_scenario(self, scenario: str) -> None:
        """Validate the model for a given scenario.

        Fields listed in :py:attr:`SCENARIO_EXCLUDED_FIELDS` for the
        scenario are not validated. Uniqueness is left to the database, so
        that concurrent creation is decided there.

        Args:
            scenario (str):
                The validation scenario.

        Raises:
            django.core.exceptions.ValidationError:
                The model failed validation.
        """
        self.full_clean(
            exclude=self.SCENARIO_EXCLUDED_FIELDS.get(scenario, ()),
            validate_unique=False)

    def __str__(self):
        """Return a string representation of the forum user.

        Returns:
            str:
            The username, or a placeholder for accounts without one.
        """
        return self.username or 'Member #%s' % self.pk

    class Meta:
        db_table = 'djforum_user'
        verbose_name = _('Forum user')
        verbose_name_plural = _('Forum users')
