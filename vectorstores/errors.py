"""
Store Errors
============
Two failure kinds, both raised straight to the caller with no local recovery:

  InvalidOptionsError  required configuration missing after defaults,
                       environment fallback and options
  RequestError         an HTTP round trip failed or its body could not be decoded
"""


class VectorStoreError(Exception):
    """Base class for every error raised by the vectorstores package."""


class InvalidOptionsError(VectorStoreError, ValueError):
    """Raised when the options given to a store are incomplete."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"invalid options: {reason}")


class RequestError(VectorStoreError):
    """
    Raised when a REST call fails.

    Attributes:
        operation:   what was being attempted, e.g. "list indexes on azure ai search"
        status_code: HTTP status of the response, None for transport failures
    """

    def __init__(self, operation: str, detail: str, status_code: int | None = None):
        self.operation = operation
        self.status_code = status_code
        super().__init__(f"{operation}: {detail}")
