"""
Application errors for clean API error handling.

Services raise these; app/api/handlers.py maps them to HTTP responses:
InvalidRequestError -> 400, UpstreamError -> 500. StartupConfigurationError is
raised while the app boots and stops it from serving at all.
"""


class RelayError(Exception):
    """Base class for errors raised while answering a question."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(RelayError):
    """Raised when the inbound query is missing or empty. No provider call is made."""


class UpstreamError(RelayError):
    """Raised when the text-generation provider fails (network, auth, quota, bad response)."""


class StartupConfigurationError(Exception):
    """Raised at startup when required configuration (API key, knowledge file) is missing or invalid."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
