"""
Error kinds raised by the route guide service.

Store-level errors (FeatureNotFoundError) are translated by the service
handlers; everything else is returned to the caller as a typed error.
"""

from typing import Any, Dict, Optional


class RouteGuideError(Exception):
    """Base exception for all route guide errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ConfigurationError(RouteGuideError):
    """Raised when settings are missing or out of range."""


class FeatureNotFoundError(RouteGuideError):
    """No stored entity matches the requested location exactly."""


class InvalidArgumentError(RouteGuideError):
    """
    Raised for requests the service refuses to process.

    This covers:
    - a missing feature or a feature without a location
    - a missing or empty update mask
    - an update whose location matches no stored feature
    """


class UnavailableError(RouteGuideError):
    """The backing store could not be reached, or the call was rejected upstream."""


class StoreClosedError(UnavailableError):
    """An operation was attempted on a store client that has been closed."""


class StreamCancelledError(RouteGuideError):
    """Raised by a request stream when the sender cancels or fails mid-stream."""


class UnimplementedError(RouteGuideError):
    """The dispatcher has no handler for the requested method."""
