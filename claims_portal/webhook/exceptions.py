"""
Webhook Layer Exceptions
"""


class WebhookError(Exception):
    """Raised when the external workflow cannot be reached or answers with an unreadable body."""
    pass
