"""
Service Layer Exceptions

Custom exceptions for the PortalService.
"""


class PortalStateError(Exception):
    """Raised when a form action does not belong to the screen the visitor is on."""
    pass
