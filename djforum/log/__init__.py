"""Logging support.

This sets up logging for a Djforum install from Django settings, and
provides the audit log used to record account changes.


Settings
========

The following settings control logging.


LOGGING_ENABLED
---------------

Default: ``False``

Sets whether or not logging is enabled.


LOGGING_DIRECTORY
-----------------

Default: ``None``

Specifies the directory that log files should be stored in.
This directory must be writable by the process running Django.


LOGGING_NAME
------------

Default: ``None``

The name of the log files, excluding the extension and path. The file
extension will be automatically appended when the file is written.


LOGGING_LINE_FORMAT
-------------------

Default: ``"%(asctime)s - %(levelname)s - %(request_info)s - %(name)s -
%(message)s"``

The format for lines in the log file. See Python's :py:mod:`logging`
documentation for possible values in the format string.


LOGGING_REQUEST_FORMAT
----------------------

Default: ``"%(user)s - %(path)s"``

The format for request information included in log lines, filled in from
the request's attributes.


LOGGING_LEVEL
-------------

Default: ``"DEBUG"``

The minimum level to log. Possible values are ``"DEBUG"``, ``"INFO"``,
``"WARNING"``, ``"ERROR"`` and ``"CRITICAL"``.


LOGGING_BLACKLIST
-----------------

Default: ``['django.db.backends']``

A list of logger names to exclude from the logs. Each logger with the given
name will be filtered out, along with any descendents of those loggers.


LOGGING_TO_STDOUT
-----------------

Default: ``False``

Whether to log output to stdout. This would be in addition to any other
configured logging, and is intended for environments like Docker.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from typing import Optional, TYPE_CHECKING

from django.conf import settings

if TYPE_CHECKING:
    from django.http import HttpRequest


_logging_setup = False

DEFAULT_LOG_LEVEL = "DEBUG"
DEFAULT_LINE_FORMAT = \
    "%(asctime)s - %(levelname)s - %(request_info)s - %(name)s - %(message)s"
DEFAULT_REQUEST_FORMAT = '%(user)s - %(path)s'

#: The name of the logger receiving audit entries.
AUDIT_LOGGER_NAME = 'djforum.audit'


audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)


class RequestLogFormatter(logging.Formatter):
    """Formats log records, including information on the HTTP request.

    Records logged with a ``request`` in ``extra`` have it formatted with
    the request format string, available to the line format as
    ``%(request_info)s``.
    """

    def __init__(self, request_fmt, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.request_fmt = request_fmt

    def format(self, record):
        record.request_info = self.format_request(
            getattr(record, 'request', None))

        return super().format(record)

    def format_request(
        self,
        request: Optional[HttpRequest],
    ) -> str:
        """Return formatted request information for the log message.

        If anything the format needs is missing from the request, an empty
        string will be returned.

        Args:
            request (django.http.HttpRequest):
                The HTTP request from the client.

        Returns:
            str:
            The request-specific string to include in the log message. This
            may be empty.
        """
        s = ''

        if request:
            try:
                s = self.request_fmt % request.__dict__
            except KeyError:
                # The request isn't populated with the keys expected in the
                # format string. Assume that we're logging before some
                # middleware has had a chance to set things up.
                pass

        return s


class BlacklistFilter(logging.Filter):
    """Blacklists the provided loggers (and their children) from logging."""

    def __init__(self, names):
        """Initialize the filter.

        Args:
            names (list of str):
                A list of logger names. Each logger (and their children) will
                be excluded from the logs.
        """
        super().__init__()

        self._filters = [
            logging.Filter(name)
            for name in names
        ]

    def filter(self, record):
        """Return whether this record should be logged.

        Args:
            record (logging.LogRecord):
                The record to filter.

        Returns:
            bool:
            ``True`` if the record can be logged. ``False`` if it must be
            ignored.
        """
        return all(not log_filter.filter(record)
                   for log_filter in self._filters)


def init_logging():
    """Set up the main loggers, if they haven't already been set up."""
    global _logging_setup

    if _logging_setup:
        return

    enabled = getattr(settings, 'LOGGING_ENABLED', False)
    logging_to_stdout = getattr(settings, 'LOGGING_TO_STDOUT', False)
    log_directory = getattr(settings, 'LOGGING_DIRECTORY', None)
    log_name = getattr(settings, 'LOGGING_NAME', None)

    if (not enabled or
        (not logging_to_stdout and
         (not log_directory or not log_name))):
        return

    log_level_name = getattr(settings, 'LOGGING_LEVEL',
                             DEFAULT_LOG_LEVEL)
    log_level = logging.getLevelName(log_level_name)
    request_format_str = getattr(settings, 'LOGGING_REQUEST_FORMAT',
                                 DEFAULT_REQUEST_FORMAT)
    format_str = getattr(settings, 'LOGGING_LINE_FORMAT',
                         DEFAULT_LINE_FORMAT)
    log_blacklist = getattr(settings, 'LOGGING_BLACKLIST', [
        'django.db.backends',
    ])

    formatter = RequestLogFormatter(request_format_str, format_str)
    root = logging.getLogger()
    handlers = []

    if log_directory and log_name:
        log_path = os.path.join(log_directory, '%s.log' % log_name)

        try:
            if sys.platform == 'win32':
                handlers.append(logging.FileHandler(log_path))
            else:
                handlers.append(logging.handlers.WatchedFileHandler(log_path))
        except IOError:
            logging.warning('Could not open logfile %s. Logging to stderr',
                            log_path)
            handlers.append(logging.StreamHandler())

    if logging_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(BlacklistFilter(log_blacklist))
        root.addHandler(handler)

    root.setLevel(log_level)

    _logging_setup = True


def log_audit(
    message: str,
    subject_id=None,
    origin: Optional[str] = None,
    request: Optional[HttpRequest] = None,
) -> None:
    """Record an entry in the audit log.

    Entries are logged at ``INFO`` level to the ``djforum.audit`` logger.
    The subject and origin are included in the message and are available
    to handlers as ``subject_id`` and ``origin`` record attributes.

    Args:
        message (str):
            A description of what happened.

        subject_id (object, optional):
            The ID of the object the entry is about.

        origin (str, optional):
            The name of the operation that caused the entry.

        request (django.http.HttpRequest, optional):
            The HTTP request that caused the entry.
    """
    audit_logger.info('%s (subject ID: %s, origin: %s)',
                      message, subject_id, origin,
                      extra={
                          'origin': origin,
                          'request': request,
                          'subject_id': subject_id,
                      })
