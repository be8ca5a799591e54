"""Exception types raised by uptimed."""

from __future__ import annotations


class UptimedError(Exception):
    """Base class for all uptimed errors."""


class MetricSourceError(UptimedError):
    """A required OS metric source could not be read or parsed."""


class FilesystemStatsError(MetricSourceError):
    """Filesystem block statistics are unavailable for the configured path.

    Unlike its parent this is recoverable: the sampler reports the disk
    gauge as 0 and carries on.
    """


class EmitError(UptimedError):
    """The encoded payload could not be sent to the statsd destination."""


class ConfigError(UptimedError):
    """The settings file could not be read or is malformed."""
