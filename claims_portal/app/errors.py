"""
API Layer Exceptions
"""


class RelayError(Exception):
    """
    Raised by the relay routes. Rendered as {"error": message} with the given
    status code by the handler registered in main.py.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
