"""Read-only git status and pull-request inspection."""

__version__ = "0.1.0"
