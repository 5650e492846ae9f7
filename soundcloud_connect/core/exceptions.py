"""
Domain exceptions for the SoundCloud client.

These exceptions are raised by the client and caught by centralized
exception handlers in main.py.
"""


class RemoteApiError(Exception):
    """
    Raised for any failed call to the SoundCloud API.

    Covers transport failures (connection refused, timeouts) as well as
    4xx and 5xx responses. The HTTP status, when there is one, is in
    ``status_code`` and the response body in ``response_text``.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_text = response_text

    def __str__(self) -> str:
        return self.message
