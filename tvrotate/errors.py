"""Error taxonomy for credential rotation."""

from __future__ import annotations


class RotatorError(Exception):
    """Base class for rotation failures."""


class SourceUnreachable(RotatorError):
    """The source URL could not be reached."""


class MalformedSource(RotatorError):
    """The source responded with something other than a key set."""


class ManagementAPIFailure(RotatorError):
    """The request to the management API could not complete.

    Non-2xx responses are not reported through this error; their body is
    returned to the caller as-is.
    """


class MissingCredential(RotatorError):
    """No bearer credential is available for the management API."""
