"""Error classes for forum accounts."""

from django.core.exceptions import ImproperlyConfigured


class ForumUserProvisioningError(ImproperlyConfigured):
    """An error creating a forum account for a host application user.

    This means the forum can't run with the current deployment (for
    instance, the database schema is missing required columns). It aborts
    the request rather than being handled per-request.
    """

    def __init__(self, host_user_id, reason=None):
        """Initialize the error.

        Args:
            host_user_id (int):
                The ID of the host application user.

            reason (Exception, optional):
                The underlying error.
        """
        self.host_user_id = host_user_id
        self.reason = reason

        super().__init__(
            'There was an error while creating the forum account for user '
            'ID %s. The forum can not run with the current configuration. '
            'Please contact the administrator about this problem.'
            % host_user_id)
