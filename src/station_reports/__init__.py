"""Station Reports - listener statistics reports and first-run setup."""

__version__ = "1.0.0"
