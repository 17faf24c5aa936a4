"""Custom exceptions for license-auditor."""


class LicenseAuditorError(Exception):
    """Base exception for all license-auditor errors."""

    pass


class ConfigurationError(LicenseAuditorError):
    """Exception raised when configuration is invalid."""

    pass


class ScanError(LicenseAuditorError):
    """Exception raised when a scan cannot be performed at all."""

    pass


class NoticeError(LicenseAuditorError):
    """Exception raised when third-party notices cannot be generated."""

    pass


class DisclaimerError(LicenseAuditorError):
    """Exception raised when the documentation disclaimer is unavailable."""

    pass
