"""License auditor for installed JavaScript dependency trees."""

__version__ = "0.1.0"
