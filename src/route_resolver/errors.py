"""Exception hierarchy for the route resolver.

Only ``ConfigurationError`` is meant to escape at startup. ``ProviderError``
subclasses are raised by individual providers and absorbed by the chain.
"""
from __future__ import annotations


class RouteResolverError(Exception):
    """Base class for all route resolver errors."""


class ConfigurationError(RouteResolverError):
    """Deployment is misconfigured (inverted bounds, bad axis, unknown provider)."""


class ProviderError(RouteResolverError):
    """A routing tier could not produce a usable path."""


class ProviderUnavailable(ProviderError):
    """Network error, timeout or non-success status from a provider."""


class MalformedResponse(ProviderError):
    """Provider answered but the payload has no usable geometry."""


class BoundaryViolation(ProviderError):
    """Provider path has at least one vertex outside the configured bounds."""


class OutOfBoundsError(RouteResolverError):
    """A consumer-supplied endpoint lies outside the configured bounds."""

    def __init__(self, which: str, lat: float, lng: float):
        self.which = which
        self.lat = lat
        self.lng = lng
        super().__init__(f"{which.capitalize()} coordinates ({lat}, {lng}) are outside the configured boundaries")


class ResolutionCancelled(RouteResolverError):
    """Caller cancelled a resolution before it finished."""
