"""
LearnHub Platform - Domain Errors
Exceptions raised by the progress engine and services; mapped to HTTP in main.py
"""


class LearnHubError(Exception):
    """Base error for all domain failures."""
    pass


class ConfigurationError(LearnHubError):
    """Content is unusable as defined (e.g. a quiz worth zero points)."""
    pass


class NotFoundError(LearnHubError):
    """A referenced quiz or lesson does not exist."""
    pass


class ValidationError(LearnHubError):
    """Malformed submission; nothing was scored or recorded."""
    pass


class ConflictError(LearnHubError):
    """A progress record was modified concurrently."""
    pass


class PermissionDeniedError(LearnHubError):
    """Actor may not read another student's data."""
    pass
