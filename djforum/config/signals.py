"""Signals for the forum configuration."""

from django.dispatch import Signal


#: Emitted when an expired forum configuration has been reloaded.
#:
#: This can be used by callers that derive state from
#: :py:class:`~djforum.config.forumconfig.ForumConfig` to recompute it after
#: another process or server has changed settings.
#:
#: Args:
#:     config (djforum.config.forumconfig.ForumConfig):
#:         The newly-loaded configuration.
#:
#:     old_config (djforum.config.forumconfig.ForumConfig):
#:         The expired configuration.
config_reloaded = Signal()
