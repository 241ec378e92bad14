"""Error taxonomy for maws.

Every failure surfaced to the command line is a :class:`MawsError`. The
``code`` attribute is stable and machine-readable; the message is what the
user sees.
"""

from __future__ import annotations


class MawsError(Exception):
    """Base class for all maws failures."""

    default_code = "maws_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code or self.default_code


class StorageError(MawsError):
    """Raised when the cache file cannot be read or written."""

    default_code = "storage_error"


class CorruptCacheError(MawsError):
    """Raised when the cache file exists but its content cannot be parsed."""

    default_code = "corrupt_cache"


class NoMFADeviceError(MawsError):
    """Raised when the profile has no registered MFA device."""

    default_code = "no_mfa_device"


class RenewalFailedError(MawsError):
    """Raised when an AWS CLI call made during renewal fails."""

    default_code = "renewal_failed"


class DelegationFailedError(MawsError):
    """Raised when the wrapped AWS CLI cannot be started."""

    default_code = "delegation_failed"
